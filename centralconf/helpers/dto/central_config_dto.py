"""
Central configuration DTOs.

Data transfer objects exchanged between the response parser component, the
fetcher service and the status interfaces.

Rules:
- Import only stdlib and typing (no centralconf.* imports at runtime)
- Pure data structures only (no I/O, no business logic)
- Everything here is immutable once constructed
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

# Fetcher lifecycle states (see CentralConfigFetcherService)
FetcherState = Literal["idle", "requesting", "parsing", "waiting", "stopped"]


class DynamicOption(str, Enum):
    """
    Closed set of options that central configuration may change at runtime.

    Member values are the wire keys used in the central configuration payload.
    """

    CAPTURE_BODY = "capture_body"
    CAPTURE_BODY_CONTENT_TYPES = "capture_body_content_types"
    CAPTURE_HEADERS = "capture_headers"
    TRANSACTION_SAMPLE_RATE = "transaction_sample_rate"
    TRANSACTION_MAX_SPANS = "transaction_max_spans"
    TRANSACTION_IGNORE_URLS = "transaction_ignore_urls"
    LOG_LEVEL = "log_level"
    RECORDING = "recording"
    SANITIZE_FIELD_NAMES = "sanitize_field_names"
    IGNORE_MESSAGE_QUEUES = "ignore_message_queues"
    STACK_TRACE_LIMIT = "stack_trace_limit"
    SPAN_STACK_TRACE_MIN_DURATION = "span_stack_trace_min_duration"
    SPAN_COMPRESSION_ENABLED = "span_compression_enabled"
    SPAN_COMPRESSION_EXACT_MATCH_MAX_DURATION = "span_compression_exact_match_max_duration"
    SPAN_COMPRESSION_SAME_KIND_MAX_DURATION = "span_compression_same_kind_max_duration"
    EXIT_SPAN_MIN_DURATION = "exit_span_min_duration"
    TRACE_CONTINUATION_STRATEGY = "trace_continuation_strategy"

    @property
    def key(self) -> str:
        """Wire key for this option."""
        return str(self.value)


@dataclass(frozen=True)
class WaitInfo:
    """How long the fetcher sleeps before the next request, and why."""

    interval_s: float
    reason: str


@dataclass(frozen=True)
class HttpResponseData:
    """
    Transport-independent view of an HTTP response.

    Header names are stored lower-cased; use header() for lookups.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None
    reason: str = ""

    def __post_init__(self) -> None:
        normalized = {str(k).lower(): str(v) for k, v in self.headers.items()}
        object.__setattr__(self, "headers", MappingProxyType(normalized))

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower())

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    def describe(self) -> str:
        """One-line summary for log messages."""
        reason = f" {self.reason}" if self.reason else ""
        return f"HTTP {self.status_code}{reason}"


@dataclass(frozen=True)
class ConfigurationDelta:
    """
    Typed overlay parsed from one successful central configuration response.

    Holds only the options present in that response whose values parsed
    successfully. Superseded wholesale by the next successful response.
    """

    values: Mapping[DynamicOption, Any]
    etag: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @property
    def description(self) -> str:
        """Provenance label used in snapshot descriptions and logs."""
        return f"central configuration (ETag: {self.etag})"

    def get(self, option: DynamicOption, default: Any = None) -> Any:
        return self.values.get(option, default)

    def __contains__(self, option: object) -> bool:
        return option in self.values

    def __iter__(self) -> Iterator[DynamicOption]:
        return iter(self.values)

    def __str__(self) -> str:
        applied = ", ".join(f"{opt.key}={_render(val)}" for opt, val in self.values.items())
        return f"[ETag: {self.etag}] {applied or '(no options)'}"


@dataclass(frozen=True)
class FetcherStatus:
    """Point-in-time status of the central configuration fetcher."""

    enabled: bool
    state: FetcherState
    etag: str | None
    iterations: int
    last_wait: WaitInfo | None
    url: str | None


def _render(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)
