"""
Domain-specific DTOs (Data Transfer Objects) used across multiple layers.

DTOs live in helpers/dto/<domain>_dto.py and form cross-layer contracts
(interfaces → services → components).

Rules for DTO modules:
- Contain ONLY dataclass/type definitions and simple type aliases
- No I/O, no business logic
- Immutable once constructed
"""

from .central_config_dto import (
    ConfigurationDelta,
    DynamicOption,
    FetcherState,
    FetcherStatus,
    HttpResponseData,
    WaitInfo,
)
from .config_dto import STATIC_CONFIG_FIELDS, StaticConfig

__all__ = [
    "STATIC_CONFIG_FIELDS",
    "ConfigurationDelta",
    "DynamicOption",
    "FetcherState",
    "FetcherStatus",
    "HttpResponseData",
    "StaticConfig",
    "WaitInfo",
]
