"""
Services package.
"""

from .infrastructure import (
    INTERNAL_HOST,
    INTERNAL_PORT,
    CentralConfigFetcherService,
    ConfigService,
    ConfigStore,
)

__all__ = [
    "INTERNAL_HOST",
    "INTERNAL_PORT",
    "CentralConfigFetcherService",
    "ConfigService",
    "ConfigStore",
]
