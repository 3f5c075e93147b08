"""
Configuration status endpoints (read-only).
Routes: /api/v1/config, /api/v1/config/central

ARCHITECTURE:
- These endpoints are thin HTTP boundaries
- Snapshots and fetcher status come from services via dependencies
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from centralconf.interfaces.api.dependencies import get_config_store, get_fetcher_service
from centralconf.interfaces.api.types.config_types import EffectiveConfigResponse, FetcherStatusResponse
from centralconf.services.infrastructure.central_config_svc import CentralConfigFetcherService
from centralconf.services.infrastructure.config_store_svc import ConfigStore

# Router instance (included in main app under /api prefix)
router = APIRouter(prefix="/v1/config", tags=["config"])


# ----------------------------------------------------------------------
#  GET /config
# ----------------------------------------------------------------------
@router.get("")
async def get_effective_config(
    store: ConfigStore = Depends(get_config_store),
) -> EffectiveConfigResponse:
    """Effective configuration: static values with central overrides applied."""
    return EffectiveConfigResponse.from_snapshot(store.current)


# ----------------------------------------------------------------------
#  GET /config/central
# ----------------------------------------------------------------------
@router.get("/central")
async def get_central_status(
    fetcher: CentralConfigFetcherService = Depends(get_fetcher_service),
) -> FetcherStatusResponse:
    """Central configuration fetcher status: state, ETag, last wait interval."""
    return FetcherStatusResponse.from_dto(fetcher.status())
