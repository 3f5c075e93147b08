"""
FastAPI application setup and configuration.
Read-only status API for the running centralconf process.

Architecture:
- All routes live under /api/v1
- No bare paths that don't start with /api
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse

from centralconf.__version__ import __version__
from centralconf.helpers.logging_helper import sanitize_exception_message
from centralconf.interfaces.api.v1 import config_if

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  App lifecycle
# ----------------------------------------------------------------------
@asynccontextmanager
async def lifespan(_app_instance: FastAPI):
    """
    FastAPI lifespan context manager.

    Note: Application.start() is called BEFORE uvicorn runs.
    This lifespan only handles cleanup on API shutdown.
    """
    # Import application only when lifespan runs (not at module import time)
    from centralconf.app import application

    logger.info("[API] FastAPI starting (Application already initialized)")

    try:
        yield
    finally:
        logger.info("[API] FastAPI shutting down...")
        application.stop()
        logger.info("[API] Shutdown complete")


# ----------------------------------------------------------------------
#  FastAPI app
# ----------------------------------------------------------------------
api_app = FastAPI(title="centralconf", version=__version__, lifespan=lifespan)


# Global exception handler
@api_app.exception_handler(Exception)
async def exception_handler(request, exc: Exception):
    return JSONResponse(status_code=500, content={"error": sanitize_exception_message(exc, "Internal server error")})


api_router = APIRouter(prefix="/api")
api_router.include_router(config_if.router)
api_app.include_router(api_router)
