"""
Registry of options that central configuration may change at runtime.

One data-driven table maps each DynamicOption to its wire key, value kind,
parser and the StaticConfig field it overrides. Built once at import.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from centralconf.components.config import option_parsers_comp as parsers
from centralconf.helpers.dto.central_config_dto import DynamicOption

ValueKind = Literal[
    "string",
    "bool",
    "int",
    "double",
    "duration",
    "string_list",
    "matcher_list",
    "log_level",
]

OptionParser = Callable[[str, str], Any]


@dataclass(frozen=True)
class DynamicOptionSpec:
    """Static description of one dynamic option."""

    option: DynamicOption
    kind: ValueKind
    parser: OptionParser
    field_name: str

    @property
    def key(self) -> str:
        return self.option.key

    def parse(self, raw: str) -> Any:
        """Parse a raw wire value. Raises OptionParseError."""
        return self.parser(self.key, raw)


def _spec(option: DynamicOption, kind: ValueKind, parser: OptionParser) -> DynamicOptionSpec:
    # Field names in StaticConfig equal the wire keys
    return DynamicOptionSpec(option=option, kind=kind, parser=parser, field_name=option.key)


DYNAMIC_OPTIONS: tuple[DynamicOptionSpec, ...] = (
    _spec(DynamicOption.CAPTURE_BODY, "string", parsers.parse_capture_body),
    _spec(DynamicOption.CAPTURE_BODY_CONTENT_TYPES, "string_list", parsers.parse_string_list),
    _spec(DynamicOption.CAPTURE_HEADERS, "bool", parsers.parse_bool),
    _spec(DynamicOption.TRANSACTION_SAMPLE_RATE, "double", parsers.parse_sample_rate),
    _spec(DynamicOption.TRANSACTION_MAX_SPANS, "int", parsers.parse_transaction_max_spans),
    _spec(DynamicOption.TRANSACTION_IGNORE_URLS, "matcher_list", parsers.parse_matcher_list),
    _spec(DynamicOption.LOG_LEVEL, "log_level", parsers.parse_log_level),
    _spec(DynamicOption.RECORDING, "bool", parsers.parse_bool),
    _spec(DynamicOption.SANITIZE_FIELD_NAMES, "matcher_list", parsers.parse_matcher_list),
    _spec(DynamicOption.IGNORE_MESSAGE_QUEUES, "matcher_list", parsers.parse_matcher_list),
    _spec(DynamicOption.STACK_TRACE_LIMIT, "int", parsers.parse_stack_trace_limit),
    _spec(DynamicOption.SPAN_STACK_TRACE_MIN_DURATION, "duration", parsers.parse_duration_ms),
    _spec(DynamicOption.SPAN_COMPRESSION_ENABLED, "bool", parsers.parse_bool),
    _spec(DynamicOption.SPAN_COMPRESSION_EXACT_MATCH_MAX_DURATION, "duration", parsers.parse_duration_ms),
    _spec(DynamicOption.SPAN_COMPRESSION_SAME_KIND_MAX_DURATION, "duration", parsers.parse_duration_ms),
    _spec(DynamicOption.EXIT_SPAN_MIN_DURATION, "duration", parsers.parse_duration_ms),
    _spec(DynamicOption.TRACE_CONTINUATION_STRATEGY, "string", parsers.parse_trace_continuation_strategy),
)

_BY_OPTION: dict[DynamicOption, DynamicOptionSpec] = {s.option: s for s in DYNAMIC_OPTIONS}

# Older servers still send these wire keys
LEGACY_KEYS: dict[str, DynamicOption] = {
    "span_frames_min_duration": DynamicOption.SPAN_STACK_TRACE_MIN_DURATION,
}

_BY_OPTION_KEY: dict[str, DynamicOptionSpec] = {s.key: s for s in DYNAMIC_OPTIONS}
_BY_KEY: dict[str, DynamicOptionSpec] = {
    **{legacy: _BY_OPTION[option] for legacy, option in LEGACY_KEYS.items()},
    **_BY_OPTION_KEY,
}
_BY_FIELD: dict[str, DynamicOptionSpec] = {s.field_name: s for s in DYNAMIC_OPTIONS}

SUPPORTED_KEYS: frozenset[str] = frozenset(_BY_OPTION_KEY)


def spec_for(option: DynamicOption) -> DynamicOptionSpec:
    """Spec for a registered option."""
    return _BY_OPTION[option]


def spec_for_key(key: str) -> DynamicOptionSpec | None:
    """Spec for a wire key (legacy keys included), or None if the key is not a dynamic option."""
    return _BY_KEY.get(key)


def spec_for_field(field_name: str) -> DynamicOptionSpec | None:
    """Spec overriding a StaticConfig field, or None for static-only fields."""
    return _BY_FIELD.get(field_name)
