"""
Config package.
"""

from .dynamic_options_comp import (
    DYNAMIC_OPTIONS,
    LEGACY_KEYS,
    SUPPORTED_KEYS,
    DynamicOptionSpec,
    spec_for,
    spec_for_field,
    spec_for_key,
)
from .log_level_comp import apply_log_level, canonical_log_level, to_logging_level
from .response_parser_comp import DEFAULT_WAIT_S, MIN_WAIT_S, ResponseParser
from .snapshot_comp import LayeredSnapshot

__all__ = [
    "DEFAULT_WAIT_S",
    "DYNAMIC_OPTIONS",
    "LEGACY_KEYS",
    "MIN_WAIT_S",
    "SUPPORTED_KEYS",
    "DynamicOptionSpec",
    "LayeredSnapshot",
    "ResponseParser",
    "apply_log_level",
    "canonical_log_level",
    "spec_for",
    "spec_for_field",
    "spec_for_key",
    "to_logging_level",
]
