#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from centralconf.components.http.http_comp import REQUEST_TIMEOUT_S
from centralconf.interfaces.cli.commands.fetch_cli import cmd_fetch
from centralconf.interfaces.cli.commands.run_cli import cmd_run
from centralconf.interfaces.cli.commands.show_cli import cmd_show


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="centralconf",
        description="centralconf - Central configuration sync for long-running services",
        epilog="Examples:\n"
        "  centralconf show                           # Print effective static configuration\n"
        "  centralconf fetch                          # Fetch and parse central config once\n"
        '  centralconf fetch --etag \'"abc"\'           # Conditional fetch (expect 304)\n'
        "  centralconf run --serve --port 8357        # Poll and expose the status API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'centralconf <command> --help' for command-specific help)",
    )

    # show: Print static configuration
    s = sub.add_parser("show", help="Print the effective static configuration")
    s.set_defaults(func=cmd_show)

    # fetch: One-shot request against the central configuration endpoint
    s = sub.add_parser("fetch", help="Fetch and parse central configuration once (never applied)")
    s.add_argument("--etag", help="send If-None-Match with this ETag")
    s.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT_S, help=f"request timeout in seconds (default: {REQUEST_TIMEOUT_S})"
    )
    s.set_defaults(func=cmd_fetch)

    # run: Polling loop (optionally with status API)
    s = sub.add_parser("run", help="Run the central configuration loop until interrupted")
    s.add_argument("--serve", action="store_true", help="also expose the read-only status API")
    s.add_argument("--host", help="status API host (default: 127.0.0.1)")
    s.add_argument("--port", type=int, help="status API port (default: 8357)")
    s.set_defaults(func=cmd_run)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    raise SystemExit(main())
