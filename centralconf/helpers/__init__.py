"""
Helpers package.

Pure, stateless utilities and DTOs safe to import from every layer.
"""

from .exceptions import FailedToFetchConfigError, FetchCancelledError, OptionParseError
from .logging_helper import (
    CentralConfLogFilter,
    clear_log_context,
    configure_logging,
    sanitize_exception_message,
    sanitize_url,
    set_log_context,
)
from .time_helper import format_interval, internal_s, now_ms
from .wildcard_helper import WildcardMatcher, any_match, is_any_match, parse_matchers

__all__ = [
    "CentralConfLogFilter",
    "FailedToFetchConfigError",
    "FetchCancelledError",
    "OptionParseError",
    "WildcardMatcher",
    "any_match",
    "clear_log_context",
    "configure_logging",
    "format_interval",
    "internal_s",
    "is_any_match",
    "now_ms",
    "parse_matchers",
    "sanitize_exception_message",
    "sanitize_url",
    "set_log_context",
]
