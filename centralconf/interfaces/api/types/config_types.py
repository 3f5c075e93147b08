"""Config API types - Pydantic models for the configuration status endpoints.

External API contracts for /api/v1/config and /api/v1/config/central.
These models are thin adapters around LayeredSnapshot and FetcherStatus.

Architecture:
- Effective values are a flat dict keyed by configuration field name
- Matcher lists are rendered back to their pattern strings
- Secrets (secret_token, api_key) are never returned
- Services continue using DTOs (no Pydantic imports in services layer)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from centralconf.helpers.logging_helper import REDACTED
from centralconf.helpers.wildcard_helper import WildcardMatcher

if TYPE_CHECKING:
    from centralconf.components.config.snapshot_comp import LayeredSnapshot
    from centralconf.helpers.dto.central_config_dto import FetcherStatus

SECRET_FIELDS = frozenset({"secret_token", "api_key"})

# ──────────────────────────────────────────────────────────────────────
# Response Models
# ──────────────────────────────────────────────────────────────────────


class EffectiveConfigResponse(BaseModel):
    """Effective configuration (static layer plus central overrides)."""

    description: str = Field(..., description="Where the effective configuration came from")
    etag: str | None = Field(None, description="ETag of the applied central configuration, if any")
    values: dict[str, Any] = Field(..., description="Effective value of every configuration field")
    overridden: list[str] = Field(default_factory=list, description="Fields currently set by central configuration")

    @classmethod
    def from_snapshot(cls, snapshot: LayeredSnapshot) -> EffectiveConfigResponse:
        values = {}
        for name, value in snapshot.as_dict().items():
            if name in SECRET_FIELDS:
                values[name] = REDACTED if value else None
            else:
                values[name] = to_plain(value)
        return cls(
            description=snapshot.description,
            etag=snapshot.etag,
            values=values,
            overridden=[name for name in values if snapshot.is_overridden(name)],
        )


class WaitInfoResponse(BaseModel):
    interval_s: float = Field(..., description="Seconds until the next fetch")
    reason: str = Field(..., description="Why this interval was chosen")


class FetcherStatusResponse(BaseModel):
    """Central configuration fetcher status."""

    enabled: bool
    state: str = Field(..., description="idle, requesting, parsing, waiting or stopped")
    etag: str | None = None
    iterations: int = Field(0, description="Number of fetch iterations run")
    last_wait: WaitInfoResponse | None = None
    url: str | None = Field(None, description="Central configuration URL (credentials redacted)")

    @classmethod
    def from_dto(cls, status: FetcherStatus) -> FetcherStatusResponse:
        last_wait = None
        if status.last_wait is not None:
            last_wait = WaitInfoResponse(interval_s=status.last_wait.interval_s, reason=status.last_wait.reason)
        return cls(
            enabled=status.enabled,
            state=status.state,
            etag=status.etag,
            iterations=status.iterations,
            last_wait=last_wait,
            url=status.url,
        )


def to_plain(value: Any) -> Any:
    """JSON-friendly rendering of a configuration value."""
    if isinstance(value, WildcardMatcher):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value
