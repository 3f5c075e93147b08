"""Infrastructure services - runtime plumbing."""

from .central_config_svc import CentralConfigFetcherService
from .config_store_svc import ConfigStore
from .config_svc import ENV_CONFIG_PATH, ENV_PREFIX, INTERNAL_HOST, INTERNAL_PORT, ConfigService

__all__ = [
    "ENV_CONFIG_PATH",
    "ENV_PREFIX",
    "INTERNAL_HOST",
    "INTERNAL_PORT",
    "CentralConfigFetcherService",
    "ConfigService",
    "ConfigStore",
]
