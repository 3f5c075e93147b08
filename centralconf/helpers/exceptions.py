"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from centralconf.helpers.dto.central_config_dto import WaitInfo


class OptionParseError(ValueError):
    """Raised when a single configuration value does not match its grammar."""

    def __init__(self, key: str, value: str, reason: str):
        super().__init__(f"Invalid value for `{key}': `{value}' ({reason})")
        self.key = key
        self.value = value
        self.reason = reason


class FailedToFetchConfigError(Exception):
    """
    Raised when a central configuration fetch cannot produce a usable result.

    Carries the wait interval to use before the next attempt and the log
    severity the failure should be reported at (stdlib logging level).
    """

    def __init__(self, message: str, wait_info: WaitInfo, severity: int = logging.ERROR):
        super().__init__(message)
        self.wait_info = wait_info
        self.severity = severity


class FetchCancelledError(Exception):
    """Raised when an in-flight central configuration request is abandoned because stop was requested."""
