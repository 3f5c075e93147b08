"""Unit tests for CentralConfigFetcherService.

The HTTP transport (fetch_config) is patched; parser, snapshot and store are real.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Generator
from dataclasses import replace
from unittest.mock import MagicMock, patch

import pytest
import requests

from centralconf.components.config.response_parser_comp import DEFAULT_WAIT_S
from centralconf.helpers.dto.central_config_dto import HttpResponseData
from centralconf.helpers.dto.config_dto import StaticConfig
from centralconf.helpers.exceptions import FetchCancelledError
from centralconf.services.infrastructure.central_config_svc import CentralConfigFetcherService
from centralconf.services.infrastructure.config_store_svc import ConfigStore

FETCH_PATH = "centralconf.services.infrastructure.central_config_svc.fetch_config"


@pytest.fixture
def fetch_mock() -> Generator[MagicMock, None, None]:
    with patch(FETCH_PATH) as mock:
        yield mock


@pytest.fixture
def fetcher(static_config: StaticConfig, config_store: ConfigStore) -> Generator[CentralConfigFetcherService, None, None]:
    service = CentralConfigFetcherService(static_config, config_store, session=MagicMock())
    yield service
    service.stop()


class TestIteration:
    @pytest.mark.unit
    def test_success_publishes_then_sets_etag(
        self,
        fetcher: CentralConfigFetcherService,
        config_store: ConfigStore,
        fetch_mock: MagicMock,
        make_response: Callable[..., HttpResponseData],
    ) -> None:
        fetch_mock.return_value = make_response(body='{"transaction_sample_rate":"0.25"}', etag='"abc"', max_age=60)
        seen_etag_during_publish: list[str | None] = []
        config_store.add_update_hook(lambda old, new: seen_etag_during_publish.append(fetcher.etag))

        wait_info = fetcher.run_iteration()

        assert config_store.current.transaction_sample_rate == 0.25
        assert fetcher.etag == '"abc"'
        assert wait_info.interval_s == 60
        # Snapshot first, identifier second
        assert seen_etag_during_publish == [None]

    @pytest.mark.unit
    def test_etag_sent_on_next_request(
        self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock, make_response
    ) -> None:
        fetch_mock.return_value = make_response(etag='"abc"')
        fetcher.run_iteration()
        fetch_mock.return_value = make_response(status_code=304, body=None, etag=None)

        fetcher.run_iteration()

        assert fetch_mock.call_args_list[0].args[2] is None
        assert fetch_mock.call_args_list[1].args[2] == '"abc"'

    @pytest.mark.unit
    def test_not_modified_keeps_snapshot_and_etag(
        self, fetcher: CentralConfigFetcherService, config_store: ConfigStore, fetch_mock: MagicMock, make_response
    ) -> None:
        fetch_mock.return_value = make_response(body='{"transaction_sample_rate":"0.25"}', etag='"abc"')
        fetcher.run_iteration()
        published = config_store.current

        fetch_mock.return_value = make_response(status_code=304, body=None, etag='"other"', max_age=30)
        wait_info = fetcher.run_iteration()

        assert config_store.current is published
        assert config_store.current.transaction_sample_rate == 0.25
        assert fetcher.etag == '"abc"'
        assert wait_info.interval_s == 30

    @pytest.mark.unit
    def test_unavailable_keeps_snapshot(
        self,
        fetcher: CentralConfigFetcherService,
        config_store: ConfigStore,
        fetch_mock: MagicMock,
        make_response,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        fetch_mock.return_value = make_response(body='{"transaction_sample_rate":"0.25"}', etag='"abc"')
        fetcher.run_iteration()
        published = config_store.current

        fetch_mock.return_value = make_response(status_code=503, body="", etag=None, max_age=None)
        with caplog.at_level(logging.DEBUG, logger="centralconf"):
            wait_info = fetcher.run_iteration()

        assert config_store.current is published
        assert fetcher.etag == '"abc"'
        assert wait_info.interval_s == DEFAULT_WAIT_S
        assert any(r.levelno == logging.ERROR and "503" in r.getMessage() for r in caplog.records)

    @pytest.mark.unit
    def test_unsupported_endpoint_logged_at_debug(
        self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock, make_response, caplog
    ) -> None:
        fetch_mock.return_value = make_response(status_code=404, body="", etag=None)

        with caplog.at_level(logging.DEBUG, logger="centralconf"):
            fetcher.run_iteration()

        records = [r for r in caplog.records if "404" in r.getMessage()]
        assert records and all(r.levelno == logging.DEBUG for r in records)

    @pytest.mark.unit
    def test_network_error_uses_default_wait(
        self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock, caplog
    ) -> None:
        fetch_mock.side_effect = requests.ConnectionError("connection refused")

        with caplog.at_level(logging.ERROR, logger="centralconf"):
            wait_info = fetcher.run_iteration()

        assert wait_info.interval_s == DEFAULT_WAIT_S
        assert any("connection refused" in r.getMessage() for r in caplog.records)

    @pytest.mark.unit
    def test_timeout_has_its_own_reason(self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock) -> None:
        fetch_mock.side_effect = requests.Timeout("no response")

        wait_info = fetcher.run_iteration()

        assert wait_info.interval_s == DEFAULT_WAIT_S
        assert wait_info.reason.startswith("request timed out after 300s")

    @pytest.mark.unit
    def test_refused_connection_reason_differs_from_timeout(
        self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock
    ) -> None:
        fetch_mock.side_effect = requests.ConnectionError("refused")

        wait_info = fetcher.run_iteration()

        assert wait_info.reason.startswith("request failed")

    @pytest.mark.unit
    def test_request_receives_stop_event(self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock) -> None:
        fetch_mock.return_value = HttpResponseData(304, {})

        fetcher.run_iteration()

        assert fetch_mock.call_args.args[4] is fetcher._stop_event

    @pytest.mark.unit
    def test_cancelled_request_publishes_nothing(
        self, fetcher: CentralConfigFetcherService, config_store: ConfigStore, fetch_mock: MagicMock
    ) -> None:
        fetch_mock.side_effect = FetchCancelledError("stop requested")
        initial = config_store.current

        wait_info = fetcher.run_iteration()

        assert wait_info.interval_s == 0
        assert config_store.current is initial

    @pytest.mark.unit
    def test_unexpected_error_never_escapes(self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock) -> None:
        fetch_mock.side_effect = RuntimeError("bug")

        wait_info = fetcher.run_iteration()

        assert wait_info.interval_s == DEFAULT_WAIT_S
        assert fetcher.status().last_wait == wait_info

    @pytest.mark.unit
    def test_status(self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock, make_response) -> None:
        fetch_mock.return_value = make_response(etag='"abc"', max_age=10)

        fetcher.run_iteration()
        status = fetcher.status()

        assert status.enabled is True
        assert status.etag == '"abc"'
        assert status.iterations == 1
        assert status.last_wait is not None and status.last_wait.interval_s == 10
        assert status.url == "http://apm.test:8200/config/v1/agents?service.name=checkout&service.environment=prod"


class TestLifecycle:
    @pytest.mark.unit
    def test_disabled_never_starts(self, static_config: StaticConfig, config_store: ConfigStore, fetch_mock) -> None:
        service = CentralConfigFetcherService(replace(static_config, central_config=False), config_store)

        service.start()

        assert service.state == "idle"
        assert not service.is_running()
        fetch_mock.assert_not_called()

    @pytest.mark.unit
    def test_stop_while_waiting_exits_promptly(
        self, fetcher: CentralConfigFetcherService, fetch_mock: MagicMock, make_response
    ) -> None:
        fetched = threading.Event()

        def _fetch(*args, **kwargs):
            fetched.set()
            return make_response(max_age=3600)

        fetch_mock.side_effect = _fetch

        fetcher.start()
        assert fetched.wait(timeout=5)
        fetcher.stop(timeout_s=5)

        assert not fetcher.is_running()
        assert fetcher.state == "stopped"
        assert fetch_mock.call_count == 1

    @pytest.mark.unit
    def test_response_after_stop_is_discarded(
        self, fetcher: CentralConfigFetcherService, config_store: ConfigStore, fetch_mock: MagicMock, make_response
    ) -> None:
        def _fetch(*args, **kwargs):
            fetcher._stop_event.set()
            return make_response(body='{"recording":"false"}')

        fetch_mock.side_effect = _fetch
        initial = config_store.current

        fetcher.run_iteration()

        assert config_store.current is initial
        assert fetcher.etag is None

    @pytest.mark.unit
    def test_stop_is_idempotent(self, fetcher: CentralConfigFetcherService) -> None:
        fetcher.stop()
        fetcher.stop()

        assert fetcher.state == "stopped"

    @pytest.mark.unit
    def test_feature_gate_logged_at_info_when_disabled(
        self, static_config: StaticConfig, config_store: ConfigStore, caplog
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="centralconf"):
            CentralConfigFetcherService(replace(static_config, central_config=False), config_store)
            CentralConfigFetcherService(static_config, config_store, session=MagicMock())

        gate = [r for r in caplog.records if "central_config=" in r.getMessage()]
        assert [r.levelno for r in gate] == [logging.INFO, logging.DEBUG]
