"""
HTTP transport for the central configuration endpoint.

GET <server_url>/config/v1/agents?service.name=<name>&service.environment=<env>

Requests are conditional (If-None-Match) once an ETag is held. Responses are
converted to HttpResponseData so the parser never sees requests objects.
Network failures surface as requests.RequestException for the caller to handle;
a missed deadline is a requests.Timeout and cancellation a FetchCancelledError.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any
from urllib.parse import urlencode

import requests

from centralconf.__version__ import __version__
from centralconf.helpers.dto.central_config_dto import HttpResponseData
from centralconf.helpers.dto.config_dto import StaticConfig
from centralconf.helpers.exceptions import FetchCancelledError
from centralconf.helpers.logging_helper import sanitize_url

logger = logging.getLogger(__name__)

CONFIG_ENDPOINT_PATH = "config/v1/agents"
REQUEST_TIMEOUT_S = 5 * 60  # Distinct from the polling wait interval
REQUEST_THREAD_NAME = "CentralConfigRequest"
READ_CHUNK_BYTES = 8192
CANCEL_POLL_S = 0.05


def build_get_config_url(server_url: str, service_name: str | None, environment: str | None) -> str:
    """
    Build the central configuration URL.

    Query parameters are omitted when unset and form-url-encoded (space as `+`).

    Example:
        >>> build_get_config_url("http://apm:8200/", "my svc", "prod")
        'http://apm:8200/config/v1/agents?service.name=my+svc&service.environment=prod'
    """
    url = f"{server_url.rstrip('/')}/{CONFIG_ENDPOINT_PATH}"
    params = []
    if service_name:
        params.append(("service.name", service_name))
    if environment:
        params.append(("service.environment", environment))
    if params:
        url = f"{url}?{urlencode(params)}"
    return url


def build_user_agent(service_name: str | None, service_version: str | None) -> str:
    """User-Agent header, e.g. "centralconf/0.3.0 (checkout 1.2.0)"."""
    agent = f"centralconf/{__version__}"
    service = " ".join(part for part in (service_name, service_version) if part)
    return f"{agent} ({service})" if service else agent


def build_authorization(config: StaticConfig) -> str | None:
    """Authorization header value; API key wins over secret token."""
    if config.api_key:
        return f"ApiKey {config.api_key}"
    if config.secret_token:
        return f"Bearer {config.secret_token}"
    return None


def build_session(config: StaticConfig) -> requests.Session:
    """Create a session carrying the identity and auth headers for every request."""
    session = requests.Session()
    session.headers["User-Agent"] = build_user_agent(config.service_name, config.service_version)
    authorization = build_authorization(config)
    if authorization:
        session.headers["Authorization"] = authorization
    session.verify = config.verify_server_cert
    return session


def fetch_config(
    session: requests.Session,
    url: str,
    etag: str | None,
    timeout_s: float = REQUEST_TIMEOUT_S,
    cancel_event: threading.Event | None = None,
) -> HttpResponseData:
    """
    Issue one (conditional) GET for central configuration.

    timeout_s bounds the whole exchange (connect, headers and body), not just
    each socket operation. The request runs on a short-lived worker thread so
    the caller can give up at the deadline or as soon as cancel_event is set,
    even while the server is still trickling bytes.

    Args:
        session: Session from build_session()
        url: URL from build_get_config_url()
        etag: ETag of the currently applied configuration, if any
        timeout_s: Total deadline in seconds
        cancel_event: Set by another thread to abandon the request

    Returns:
        The response as HttpResponseData (any status code)

    Raises:
        requests.Timeout: When the deadline passes before the body is complete
        requests.RequestException: On connection or other transport failure
        FetchCancelledError: When cancel_event is set before completion
    """
    headers = {"If-None-Match": etag} if etag else {}
    logger.debug(f"[HTTP] GET {sanitize_url(url)} (If-None-Match: {etag or '-'})")

    deadline = time.monotonic() + timeout_s
    abandon = threading.Event()
    finished = threading.Event()
    outcome: dict[str, Any] = {}

    def _request() -> None:
        try:
            outcome["response"] = _get(session, url, headers, timeout_s, deadline, abandon)
        except Exception as e:
            outcome["error"] = e
        finally:
            finished.set()

    threading.Thread(target=_request, daemon=True, name=REQUEST_THREAD_NAME).start()

    while not finished.wait(CANCEL_POLL_S):
        if cancel_event is not None and cancel_event.is_set():
            abandon.set()
            raise FetchCancelledError(f"Request to {sanitize_url(url)} abandoned: stop requested")
        if time.monotonic() >= deadline:
            abandon.set()
            raise requests.Timeout(f"Request to {sanitize_url(url)} did not complete within {timeout_s:g}s")

    if "error" in outcome:
        raise outcome["error"]
    return outcome["response"]


def _get(
    session: requests.Session,
    url: str,
    headers: dict[str, str],
    timeout_s: float,
    deadline: float,
    abandon: threading.Event,
) -> HttpResponseData:
    # Body is streamed so the worker also gives up between chunks
    response = session.get(url, headers=headers, timeout=timeout_s, stream=True)
    try:
        body = bytearray()
        for chunk in response.iter_content(chunk_size=READ_CHUNK_BYTES):
            if abandon.is_set() or time.monotonic() >= deadline:
                raise requests.Timeout(f"Response body from {sanitize_url(url)} not received in time")
            body.extend(chunk)
        return HttpResponseData(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=body.decode(response.encoding or "utf-8", errors="replace"),
            reason=response.reason or "",
        )
    finally:
        response.close()
