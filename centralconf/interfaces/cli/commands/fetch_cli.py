"""
Fetch command: perform one central configuration request and print the result.

Never publishes anything; useful to check connectivity, auth and payloads.
"""

from __future__ import annotations

import argparse
import logging

import requests

from centralconf.components.config.response_parser_comp import ResponseParser
from centralconf.components.http.http_comp import build_get_config_url, build_session, fetch_config
from centralconf.helpers.exceptions import FailedToFetchConfigError
from centralconf.helpers.logging_helper import sanitize_url
from centralconf.helpers.time_helper import format_interval
from centralconf.interfaces.cli.cli_ui import (
    InfoPanel,
    config_table,
    console,
    print_error,
    print_info,
    print_warning,
    show_spinner,
)
from centralconf.services.infrastructure.config_svc import ConfigService


def cmd_fetch(args: argparse.Namespace) -> int:
    """
    Fetch and parse central configuration once.
    """
    static = ConfigService().get_config()
    url = build_get_config_url(static.server_url, static.service_name, static.environment)
    safe_url = sanitize_url(url)

    session = build_session(static)
    try:
        response = show_spinner(
            f"Requesting {safe_url}...",
            fetch_config,
            session,
            url,
            args.etag,
            args.timeout,
        )
    except requests.RequestException as e:
        print_error(f"Request to {safe_url} failed: {e}")
        return 1
    finally:
        session.close()

    try:
        delta, wait_info = ResponseParser().parse(response)
    except FailedToFetchConfigError as e:
        if e.severity >= logging.ERROR:
            print_error(str(e))
        else:
            print_warning(str(e))
        print_info(f"Next fetch would be in {format_interval(e.wait_info.interval_s)} ({e.wait_info.reason})")
        return 1

    if delta is None:
        print_info(f"Not modified (ETag: {args.etag})")
    else:
        values = {option.key: value for option, value in delta.values.items()}
        console.print(config_table(delta.description, values))
        if not values:
            print_info("Central configuration contains no applicable options")

    content = f"""[bold]URL:[/bold] {safe_url}
[bold]Status:[/bold] {response.describe()}
[bold]Next fetch in:[/bold] {format_interval(wait_info.interval_s)}
[bold]Reason:[/bold] {wait_info.reason}"""
    InfoPanel.show("Central Configuration", content, "green")
    return 0
