"""
HTTP package.
"""

from .http_comp import REQUEST_TIMEOUT_S, build_get_config_url, build_session, fetch_config

__all__ = [
    "REQUEST_TIMEOUT_S",
    "build_get_config_url",
    "build_session",
    "fetch_config",
]
