"""
Composition root for centralconf: wires static config, store and fetcher.

This module defines the Application class, which owns the static configuration,
the configuration store and the central configuration fetcher.

Architecture:
- Application owns: config service, static config, config store, fetcher
- start() registers "config", "config_store" and "central_config"
- Lookups go through application.get_service(name)
- Readers get configuration via application.current_config()

Interfaces import the module-level `application` lazily.
"""

from __future__ import annotations

import logging
from typing import Any

from centralconf.components.config.log_level_comp import apply_log_level
from centralconf.components.config.snapshot_comp import LayeredSnapshot
from centralconf.helpers.logging_helper import sanitize_url
from centralconf.services.infrastructure.central_config_svc import CentralConfigFetcherService
from centralconf.services.infrastructure.config_store_svc import ConfigStore
from centralconf.services.infrastructure.config_svc import INTERNAL_HOST, INTERNAL_PORT, ConfigService

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  Application
# ----------------------------------------------------------------------
class Application:
    """
    Owns the static configuration, the store and the fetcher.

    The store is created from the static configuration before the fetcher,
    so readers always have a snapshot, even when central configuration is
    disabled or unreachable.
    """

    def __init__(self, config_service: ConfigService | None = None):
        """
        Load static configuration and seed the store.

        The fetcher is created and started during start().
        """
        self._config_service = config_service or ConfigService()
        self.static_config = self._config_service.get_config()

        # Status API bind address
        self.api_host: str = INTERNAL_HOST
        self.api_port: int = INTERNAL_PORT

        self.config_store = ConfigStore(LayeredSnapshot(self.static_config))
        self.fetcher: CentralConfigFetcherService | None = None

        # name -> service
        self.services: dict[str, Any] = {}

        self._running = False

    def register_service(self, name: str, service: Any) -> None:
        """
        Make a service available to get_service().

        Args:
            name: Lookup key
            service: Service instance
        """
        self.services[name] = service

    def get_service(self, name: str) -> Any:
        """
        Look up a registered service.

        Raises:
            KeyError: If nothing is registered under name
        """
        if name not in self.services:
            raise KeyError(f"Service '{name}' not found. Available services: {list(self.services.keys())}")
        return self.services[name]

    def current_config(self) -> LayeredSnapshot:
        """Latest configuration snapshot (lock-free)."""
        return self.config_store.current

    def start(self) -> None:
        """
        Start the application.

        1. Registers config, config_store and central_config services
        2. Applies the configured log level and hooks it to central changes
        3. Starts the central configuration fetcher (unless disabled)
        """
        if self._running:
            logger.warning("[Application] Already running, ignoring start() call")
            return

        logger.info("[Application] Starting...")

        self.register_service("config", self._config_service)
        self.register_service("config_store", self.config_store)

        apply_log_level(self.current_config().log_level)
        self.config_store.add_field_hook("log_level", _on_log_level_changed)

        self.fetcher = CentralConfigFetcherService(self.static_config, self.config_store)
        self.register_service("central_config", self.fetcher)
        self.fetcher.start()

        logger.info(
            f"[Application] Started (server_url={sanitize_url(self.static_config.server_url)}, "
            f"service_name={self.static_config.service_name or '-'})"
        )
        self._running = True

    def stop(self) -> None:
        """Stop the fetcher and drop update hooks. Idempotent."""
        if not self._running:
            return

        logger.info("[Application] Shutting down...")

        if self.fetcher:
            self.fetcher.stop()

        self.config_store.close()

        self._running = False
        logger.info("[Application] Shutdown complete")

    def is_running(self) -> bool:
        """True between start() and stop()."""
        return self._running


def _on_log_level_changed(old: object, new: object) -> None:
    apply_log_level(str(new))


# ----------------------------------------------------------------------
#  Process-wide instance
# ----------------------------------------------------------------------
application = Application()
