"""
Show command: print the effective static configuration.
"""

from __future__ import annotations

import argparse

from centralconf.components.config.snapshot_comp import LayeredSnapshot
from centralconf.interfaces.cli.cli_ui import config_table, console, print_error
from centralconf.services.infrastructure.config_svc import ConfigService


def cmd_show(args: argparse.Namespace) -> int:
    """
    Load configuration from defaults, YAML files and environment and print it.
    """
    try:
        static = ConfigService().get_config()
    except Exception as e:
        print_error(f"Error loading configuration: {e}")
        return 1

    snapshot = LayeredSnapshot(static)
    console.print(config_table(snapshot.description, snapshot.as_dict()))
    return 0
