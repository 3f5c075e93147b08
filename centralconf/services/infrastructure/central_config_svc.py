"""
Central configuration fetcher service.

## Fetcher Contract

CentralConfigFetcherService OWNS:
- Single background polling thread ("CentralConfigFetcher")
- The HTTP session and the ETag of the applied configuration
- The stop event observed by both the HTTP call (cancels it) and the inter-poll sleep

CentralConfigFetcherService EMITS:
- New LayeredSnapshot(static, delta) into the ConfigStore on every 2xx

### State Model

| State      | Meaning                                             |
|------------|-----------------------------------------------------|
| idle       | Constructed, loop not running (or feature disabled) |
| requesting | Conditional GET in flight                           |
| parsing    | Response received, being parsed/applied             |
| waiting    | Sleeping until the next poll (interruptible)        |
| stopped    | Terminal; thread ended and session closed           |

### Key Rules

1. Snapshot is published before the ETag is updated.
2. 304 never changes the ETag or the published snapshot.
3. No failure escapes an iteration; the last good snapshot stays current.
4. A response arriving after stop() was requested is discarded.
"""

from __future__ import annotations

import logging
import threading

import requests

from centralconf.components.config.response_parser_comp import DEFAULT_WAIT_S, ResponseParser
from centralconf.components.config.snapshot_comp import LayeredSnapshot
from centralconf.components.http.http_comp import REQUEST_TIMEOUT_S, build_get_config_url, build_session, fetch_config
from centralconf.helpers.dto.central_config_dto import ConfigurationDelta, FetcherState, FetcherStatus, WaitInfo
from centralconf.helpers.dto.config_dto import StaticConfig
from centralconf.helpers.exceptions import FailedToFetchConfigError, FetchCancelledError
from centralconf.helpers.logging_helper import clear_log_context, sanitize_url, set_log_context
from centralconf.helpers.time_helper import format_interval
from centralconf.services.infrastructure.config_store_svc import ConfigStore

logger = logging.getLogger(__name__)

THREAD_NAME = "CentralConfigFetcher"
DEFAULT_CENTRAL_CONFIG = True


class CentralConfigFetcherService:
    """
    Polls the central configuration endpoint and publishes snapshots.

    Runs one iteration at a time: request → parse → publish → wait.
    The feature gate (StaticConfig.central_config) is read once at construction.
    """

    def __init__(
        self,
        static: StaticConfig,
        store: ConfigStore,
        parser: ResponseParser | None = None,
        session: requests.Session | None = None,
        request_timeout_s: float = REQUEST_TIMEOUT_S,
    ):
        """
        Args:
            static: Static configuration (bottom layer of every published snapshot)
            store: Store receiving new snapshots
            parser: Response parser (default ResponseParser())
            session: HTTP session (default built from static config)
            request_timeout_s: Timeout for each HTTP request
        """
        self._static = static
        self._store = store
        self._parser = parser or ResponseParser()
        self._request_timeout_s = request_timeout_s

        self.enabled = static.central_config
        self._url = build_get_config_url(static.server_url, static.service_name, static.environment)
        self._session = session if session is not None else (build_session(static) if self.enabled else None)

        self._etag: str | None = None
        self._state: FetcherState = "idle"
        self._iterations = 0
        self._last_wait: WaitInfo | None = None

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        level = logging.DEBUG if self.enabled == DEFAULT_CENTRAL_CONFIG else logging.INFO
        logger.log(
            level,
            f"[CentralConfig] Central configuration is {'enabled' if self.enabled else 'disabled'} "
            f"(central_config={str(self.enabled).lower()})",
        )

    # ---------------------------- Lifecycle ----------------------------------

    def start(self) -> None:
        """Start the polling thread (no-op when the feature is disabled)."""
        if not self.enabled:
            logger.debug("[CentralConfig] Not starting: central configuration disabled")
            return
        if self._thread and self._thread.is_alive():
            logger.warning("[CentralConfig] Already running")
            return
        if self._stop_event.is_set():
            logger.warning("[CentralConfig] Cannot restart a stopped fetcher")
            return

        self._thread = threading.Thread(target=self._run_loop, daemon=True, name=THREAD_NAME)
        self._thread.start()
        logger.info(f"[CentralConfig] Started polling {sanitize_url(self._url)}")

    def stop(self, timeout_s: float = 5.0) -> None:
        """Request cancellation and wait for the polling thread. Idempotent."""
        if self._stop_event.is_set():
            return

        logger.info("[CentralConfig] Stopping...")
        self._stop_event.set()

        thread = self._thread
        if thread is not None:
            thread.join(timeout=timeout_s)
            if thread.is_alive():
                # Only a slow update hook can hold the loop here; the HTTP call is cancelled
                logger.warning(f"[CentralConfig] Fetcher thread did not stop within {timeout_s}s")
        else:
            self._set_state("stopped")
            self._close_session()

        logger.info("[CentralConfig] Stopped")

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ------------------------------ Status -----------------------------------

    @property
    def state(self) -> FetcherState:
        with self._lock:
            return self._state

    @property
    def etag(self) -> str | None:
        return self._etag

    @property
    def url(self) -> str:
        return self._url

    def status(self) -> FetcherStatus:
        """Point-in-time status for the status API and CLI."""
        with self._lock:
            return FetcherStatus(
                enabled=self.enabled,
                state=self._state,
                etag=self._etag,
                iterations=self._iterations,
                last_wait=self._last_wait,
                url=sanitize_url(self._url),
            )

    # ---------------------------- Iteration ----------------------------------

    def run_iteration(self) -> WaitInfo:
        """
        Run one request → parse → publish step.

        Never raises; every failure is logged and mapped to a wait interval.

        Returns:
            How long to wait before the next iteration
        """
        with self._lock:
            self._iterations += 1

        try:
            wait_info = self._fetch_and_apply()
        except FailedToFetchConfigError as e:
            logger.log(e.severity, f"[CentralConfig] {e}")
            wait_info = e.wait_info
        except FetchCancelledError as e:
            logger.debug(f"[CentralConfig] {e}")
            wait_info = WaitInfo(0, "stop requested")
        except requests.Timeout as e:
            logger.error(f"[CentralConfig] Request to {sanitize_url(self._url)} timed out: {e}")
            wait_info = WaitInfo(
                DEFAULT_WAIT_S,
                f"request timed out after {self._request_timeout_s:g}s - "
                f"retrying after default interval ({format_interval(DEFAULT_WAIT_S)})",
            )
        except requests.RequestException as e:
            logger.error(f"[CentralConfig] Request to {sanitize_url(self._url)} failed: {e}")
            wait_info = WaitInfo(
                DEFAULT_WAIT_S,
                f"request failed - retrying after default interval ({format_interval(DEFAULT_WAIT_S)})",
            )
        except Exception as e:
            logger.exception(f"[CentralConfig] Unexpected error while fetching central configuration: {e}")
            wait_info = WaitInfo(
                DEFAULT_WAIT_S,
                f"unexpected error - retrying after default interval ({format_interval(DEFAULT_WAIT_S)})",
            )

        with self._lock:
            self._last_wait = wait_info
        return wait_info

    def _fetch_and_apply(self) -> WaitInfo:
        if self._session is None:
            self._session = build_session(self._static)

        self._set_state("requesting")
        response = fetch_config(self._session, self._url, self._etag, self._request_timeout_s, self._stop_event)

        if self._stop_event.is_set():
            logger.debug(f"[CentralConfig] Stop requested, discarding response ({response.describe()})")
            return WaitInfo(0, "stop requested")

        self._set_state("parsing")
        delta, wait_info = self._parser.parse(response)
        if delta is None:
            logger.debug(f"[CentralConfig] Configuration unchanged (ETag: {self._etag})")
        else:
            self._apply(delta)
        return wait_info

    def _apply(self, delta: ConfigurationDelta) -> None:
        self._store.publish(LayeredSnapshot(self._static, delta))
        self._etag = delta.etag
        logger.info(f"[CentralConfig] Applied {delta.description}: {delta}")

    # ------------------------- Polling Loop ----------------------------------

    def _run_loop(self) -> None:
        set_log_context(service=self._static.service_name or "-")
        try:
            while not self._stop_event.is_set():
                wait_info = self.run_iteration()
                if self._stop_event.is_set():
                    break

                self._set_state("waiting")
                logger.debug(
                    f"[CentralConfig] Next fetch in {format_interval(wait_info.interval_s)} ({wait_info.reason})"
                )
                if self._stop_event.wait(wait_info.interval_s):
                    break
        finally:
            self._set_state("stopped")
            self._close_session()
            clear_log_context()

    def _set_state(self, state: FetcherState) -> None:
        with self._lock:
            self._state = state

    def _close_session(self) -> None:
        if self._session is not None:
            self._session.close()
