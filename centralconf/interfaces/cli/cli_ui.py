#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent interface across all commands.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from centralconf.helpers.logging_helper import REDACTED
from centralconf.helpers.wildcard_helper import WildcardMatcher

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"
COLOR_CENTRAL = "magenta"

SECRET_FIELDS = frozenset({"secret_token", "api_key"})


class InfoPanel:
    """
    Simple panel for displaying status/info without progress tracking.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


def show_spinner(message: str, task_fn: Callable, *args, **kwargs):
    """
    Show a spinner while executing a task.
    Returns the result of task_fn.
    """
    with console.status(f"[bold {COLOR_INFO}]{message}[/bold {COLOR_INFO}]"):
        return task_fn(*args, **kwargs)


def format_value(name: str, value: Any) -> str:
    """Render a configuration value for display (secrets masked)."""
    if name in SECRET_FIELDS:
        return REDACTED if value else "-"
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) or "(empty)"
    if isinstance(value, WildcardMatcher):
        return str(value)
    return str(value)


def config_table(title: str, values: Mapping[str, Any], highlighted: Iterable[str] = ()) -> Table:
    """
    Build a two-column table of configuration values.

    Args:
        title: Table title
        values: Field name -> value
        highlighted: Field names to mark as coming from central configuration
    """
    marked = set(highlighted)
    table = Table(title=title, box=box.ROUNDED, show_lines=False)
    table.add_column("Option", style="bold")
    table.add_column("Value", overflow="fold")
    for name, value in values.items():
        rendered = format_value(name, value)
        if name in marked:
            table.add_row(f"[{COLOR_CENTRAL}]{name}[/{COLOR_CENTRAL}]", f"[{COLOR_CENTRAL}]{rendered}[/{COLOR_CENTRAL}]")
        else:
            table.add_row(name, rendered)
    return table


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {message}")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[bold {COLOR_WARNING}]⚠[/bold {COLOR_WARNING}] {message}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[{COLOR_INFO}][i][/{COLOR_INFO}] {message}")
