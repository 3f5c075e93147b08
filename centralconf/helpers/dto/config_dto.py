"""
Config domain DTOs.

StaticConfig is the immutable configuration loaded once at startup by
ConfigService. Every dynamic option has a field here with the same name as its
wire key; LayeredSnapshot overlays central configuration on top of it.

Rules:
- Import only stdlib, typing and pure helpers (wildcard_helper)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from centralconf.helpers.wildcard_helper import WildcardMatcher, parse_matchers

DEFAULT_SERVER_URL = "http://127.0.0.1:8200"

DEFAULT_CAPTURE_BODY_CONTENT_TYPES: tuple[str, ...] = (
    "application/x-www-form-urlencoded*",
    "text/*",
    "application/json*",
    "application/xml*",
)

DEFAULT_SANITIZE_FIELD_NAMES: tuple[str, ...] = (
    "password",
    "passwd",
    "pwd",
    "secret",
    "*key",
    "*token*",
    "*session*",
    "*credit*",
    "*card*",
    "*auth*",
    "set-cookie",
    "*principal*",
)

DEFAULT_TRANSACTION_IGNORE_URLS: tuple[str, ...] = (
    "/VAADIN/*",
    "/heartbeat*",
    "/favicon.ico",
    "*.js",
    "*.css",
    "*.jpg",
    "*.jpeg",
    "*.png",
    "*.gif",
    "*.webp",
    "*.svg",
    "*.woff",
    "*.woff2",
)


@dataclass(frozen=True)
class StaticConfig:
    """Configuration loaded once at process start. Never mutated."""

    # Connection / identity (static only)
    server_url: str = DEFAULT_SERVER_URL
    service_name: str | None = None
    service_version: str | None = None
    environment: str | None = None
    secret_token: str | None = None
    api_key: str | None = None
    verify_server_cert: bool = True
    central_config: bool = True

    # Dynamic options (central configuration may override these)
    capture_body: str = "off"
    capture_body_content_types: tuple[str, ...] = DEFAULT_CAPTURE_BODY_CONTENT_TYPES
    capture_headers: bool = True
    transaction_sample_rate: float = 1.0
    transaction_max_spans: int = 500
    transaction_ignore_urls: tuple[WildcardMatcher, ...] = field(
        default_factory=lambda: parse_matchers(DEFAULT_TRANSACTION_IGNORE_URLS)
    )
    log_level: str = "error"
    recording: bool = True
    sanitize_field_names: tuple[WildcardMatcher, ...] = field(
        default_factory=lambda: parse_matchers(DEFAULT_SANITIZE_FIELD_NAMES)
    )
    ignore_message_queues: tuple[WildcardMatcher, ...] = ()
    stack_trace_limit: int = 50
    span_stack_trace_min_duration: float = 5.0  # milliseconds
    span_compression_enabled: bool = True
    span_compression_exact_match_max_duration: float = 50.0  # milliseconds
    span_compression_same_kind_max_duration: float = 0.0  # milliseconds
    exit_span_min_duration: float = 0.0  # milliseconds
    trace_continuation_strategy: str = "continue"

    # Where this configuration came from (for logs and snapshot descriptions)
    description: str = "static configuration"


STATIC_CONFIG_FIELDS: frozenset[str] = frozenset(f.name for f in fields(StaticConfig) if f.name != "description")
