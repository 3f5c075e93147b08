"""
FastAPI dependency injection helpers.

ARCHITECTURE:
- Endpoints only inject services, never construct them
- The Application singleton is imported lazily (not at module import time)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException

if TYPE_CHECKING:
    from centralconf.services.infrastructure.central_config_svc import CentralConfigFetcherService
    from centralconf.services.infrastructure.config_store_svc import ConfigStore


def get_config_store() -> ConfigStore:
    """Get ConfigStore instance."""
    from centralconf.app import application

    return application.config_store


def get_fetcher_service() -> CentralConfigFetcherService:
    """Get CentralConfigFetcherService instance."""
    from centralconf.app import application

    service = application.services.get("central_config")
    if not service:
        raise HTTPException(status_code=503, detail="Central configuration service not available")
    return service  # type: ignore[no-any-return]
