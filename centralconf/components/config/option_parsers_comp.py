"""
Parsers for configuration value grammars.

Every parser takes the option key (for error messages) and the raw string and
returns the typed value, or raises OptionParseError. The same parsers are used
for central configuration payloads and for the static config loader.

Durations are returned in milliseconds (float).
"""

from __future__ import annotations

import math
import re

from centralconf.components.config.log_level_comp import LOG_LEVELS, canonical_log_level
from centralconf.helpers.exceptions import OptionParseError
from centralconf.helpers.wildcard_helper import WildcardMatcher, parse_matchers

CAPTURE_BODY_VALUES = ("off", "errors", "transactions", "all")
TRACE_CONTINUATION_STRATEGIES = ("continue", "restart", "restart_external")

_INT_RE = re.compile(r"^[+-]?\d+$")
_DURATION_RE = re.compile(r"^([+-]?\d+(?:\.\d+)?)\s*(ms|s|m)?$", re.IGNORECASE)

# Unit -> milliseconds multiplier
_DURATION_UNITS: dict[str, float] = {
    "ms": 1.0,
    "s": 1000.0,
    "m": 60_000.0,
}


def parse_string(key: str, raw: str) -> str:
    """Non-empty string, trimmed."""
    value = raw.strip()
    if not value:
        raise OptionParseError(key, raw, "value must not be empty")
    return value


def parse_bool(key: str, raw: str) -> bool:
    """`true` / `false`, case-insensitive."""
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise OptionParseError(key, raw, "expected `true' or `false'")


def parse_int(key: str, raw: str) -> int:
    """Base-10 integer, optional sign."""
    value = raw.strip()
    if not _INT_RE.match(value):
        raise OptionParseError(key, raw, "expected an integer")
    return int(value)


def parse_transaction_max_spans(key: str, raw: str) -> int:
    """Integer >= -1 (-1 means unlimited)."""
    value = parse_int(key, raw)
    if value < -1:
        raise OptionParseError(key, raw, "must be -1 or greater")
    return value


def parse_stack_trace_limit(key: str, raw: str) -> int:
    """Any integer (0 disables stack traces, negative means unlimited)."""
    return parse_int(key, raw)


def parse_double(key: str, raw: str) -> float:
    value = raw.strip()
    try:
        number = float(value)
    except ValueError:
        raise OptionParseError(key, raw, "expected a number") from None
    if not math.isfinite(number):
        raise OptionParseError(key, raw, "expected a finite number")
    return number


def parse_sample_rate(key: str, raw: str) -> float:
    """Float in [0, 1]."""
    rate = parse_double(key, raw)
    if not 0.0 <= rate <= 1.0:
        raise OptionParseError(key, raw, "must be between 0 and 1")
    return rate


def parse_duration_ms(key: str, raw: str) -> float:
    """
    `<number>(ms|s|m)` with no unit meaning milliseconds.

    Examples:
        "5ms" -> 5.0, "1s" -> 1000.0, "2m" -> 120000.0, "50" -> 50.0
    """
    match = _DURATION_RE.match(raw.strip())
    if not match:
        raise OptionParseError(key, raw, "expected a duration such as 5ms, 1s or 2m")
    number, unit = match.groups()
    return float(number) * _DURATION_UNITS[(unit or "ms").lower()]


def parse_capture_body(key: str, raw: str) -> str:
    return _parse_choice(key, raw, CAPTURE_BODY_VALUES)


def parse_trace_continuation_strategy(key: str, raw: str) -> str:
    return _parse_choice(key, raw, TRACE_CONTINUATION_STRATEGIES)


def parse_log_level(key: str, raw: str) -> str:
    """Level name, returned in canonical form (`information` -> `info`, `none` -> `off`)."""
    canonical = canonical_log_level(raw)
    if canonical is None:
        raise OptionParseError(key, raw, f"expected one of {', '.join(LOG_LEVELS)}")
    return canonical


def parse_string_list(key: str, raw: str) -> tuple[str, ...]:
    """Comma-separated list; entries trimmed, empty entries dropped."""
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def parse_matcher_list(key: str, raw: str) -> tuple[WildcardMatcher, ...]:
    """Comma-separated wildcard patterns."""
    return parse_matchers(parse_string_list(key, raw))


def _parse_choice(key: str, raw: str, choices: tuple[str, ...]) -> str:
    value = raw.strip().lower()
    if value not in choices:
        raise OptionParseError(key, raw, f"expected one of {', '.join(choices)}")
    return value
