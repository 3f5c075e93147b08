"""
Layered configuration snapshot.

A LayeredSnapshot composes the immutable static configuration with the latest
central configuration delta. Every read is a pure function of (static, delta):

    snapshot.transaction_sample_rate   # delta value if present, else static
    snapshot.resolve("log_level")

Snapshots are never mutated; ConfigStore replaces the current one wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from centralconf.components.config.dynamic_options_comp import spec_for_field
from centralconf.helpers.dto.central_config_dto import ConfigurationDelta
from centralconf.helpers.dto.config_dto import STATIC_CONFIG_FIELDS, StaticConfig

_OWN_FIELDS = frozenset({"static", "delta"})


@dataclass(frozen=True)
class LayeredSnapshot:
    """Read-only view over (static configuration, optional central delta)."""

    static: StaticConfig
    delta: ConfigurationDelta | None = None

    @property
    def description(self) -> str:
        """Provenance, e.g. "static configuration + central (ETag: "abc")"."""
        if self.delta is None:
            return self.static.description
        return f"{self.static.description} + central (ETag: {self.delta.etag})"

    @property
    def etag(self) -> str | None:
        return self.delta.etag if self.delta is not None else None

    def resolve(self, name: str) -> Any:
        """
        Effective value of a configuration field.

        Raises:
            KeyError: If `name` is not a configuration field
        """
        if name not in STATIC_CONFIG_FIELDS:
            raise KeyError(name)
        if self.delta is not None:
            spec = spec_for_field(name)
            if spec is not None and spec.option in self.delta:
                return self.delta.get(spec.option)
        return getattr(self.static, name)

    def is_overridden(self, name: str) -> bool:
        """True if the effective value of `name` comes from central configuration."""
        if self.delta is None:
            return False
        spec = spec_for_field(name)
        return spec is not None and spec.option in self.delta

    def as_dict(self) -> dict[str, Any]:
        """All effective field values, in StaticConfig field order."""
        return {f.name: self.resolve(f.name) for f in fields(StaticConfig) if f.name in STATIC_CONFIG_FIELDS}

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; never resolve private or own names
        if name.startswith("_") or name in _OWN_FIELDS:
            raise AttributeError(name)
        try:
            return self.resolve(name)
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None
