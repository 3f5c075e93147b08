"""Pydantic request/response models for the API layer."""

from .config_types import EffectiveConfigResponse, FetcherStatusResponse, WaitInfoResponse

__all__ = [
    "EffectiveConfigResponse",
    "FetcherStatusResponse",
    "WaitInfoResponse",
]
