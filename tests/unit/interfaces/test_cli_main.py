"""Unit tests for the centralconf CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from centralconf.helpers.dto.central_config_dto import HttpResponseData
from centralconf.interfaces.cli import cli_ui
from centralconf.interfaces.cli.cli_main import build_parser, main

FETCH_PATH = "centralconf.interfaces.cli.commands.fetch_cli.fetch_config"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("CENTRALCONF_CONFIG_PATH", "CENTRALCONF_SERVICE_NAME", "CENTRALCONF_SERVER_URL"):
        monkeypatch.delenv(name, raising=False)
    # Wide console so table cells are never folded
    monkeypatch.setattr(cli_ui.console, "width", 200)


class TestParser:
    @pytest.mark.unit
    def test_run_arguments(self) -> None:
        args = build_parser().parse_args(["run", "--serve", "--port", "9000"])

        assert args.cmd == "run"
        assert args.serve is True
        assert args.port == 9000
        assert args.host is None

    @pytest.mark.unit
    def test_fetch_arguments(self) -> None:
        args = build_parser().parse_args(["fetch", "--etag", '"abc"'])

        assert args.etag == '"abc"'
        assert args.timeout == 300

    @pytest.mark.unit
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestShow:
    @pytest.mark.unit
    def test_show_prints_configuration(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setenv("CENTRALCONF_SERVICE_NAME", "checkout")

        assert main(["show"]) == 0

        out = capsys.readouterr().out
        assert "checkout" in out
        assert "transaction_sample_rate" in out


class TestFetch:
    @pytest.mark.unit
    def test_fetch_success(self, capsys) -> None:
        response = HttpResponseData(
            200, {"ETag": '"abc"', "Cache-Control": "max-age=60"}, body='{"transaction_sample_rate":"0.25"}'
        )
        with patch(FETCH_PATH, return_value=response) as fetch_mock:
            assert main(["fetch"]) == 0

        out = capsys.readouterr().out
        assert "0.25" in out
        assert "1m" in out
        assert fetch_mock.call_args.args[2] is None

    @pytest.mark.unit
    def test_fetch_not_modified(self, capsys) -> None:
        response = HttpResponseData(304, {})
        with patch(FETCH_PATH, return_value=response) as fetch_mock:
            assert main(["fetch", "--etag", '"abc"']) == 0

        assert "Not modified" in capsys.readouterr().out
        assert fetch_mock.call_args.args[2] == '"abc"'

    @pytest.mark.unit
    def test_fetch_server_error(self, capsys) -> None:
        with patch(FETCH_PATH, return_value=HttpResponseData(503, {}, body="")):
            assert main(["fetch"]) == 1

        assert "503" in capsys.readouterr().out

    @pytest.mark.unit
    def test_fetch_network_error(self, capsys) -> None:
        with patch(FETCH_PATH, side_effect=requests.ConnectionError("refused")):
            assert main(["fetch"]) == 1

        assert "refused" in capsys.readouterr().out


class TestRun:
    @pytest.mark.unit
    def test_run_with_serve_starts_and_stops_application(self) -> None:
        application = MagicMock()
        application.api_host = "127.0.0.1"
        application.api_port = 8357
        with (
            patch("centralconf.app.application", application),
            patch("uvicorn.run") as uvicorn_run,
            patch("centralconf.interfaces.cli.commands.run_cli.configure_logging"),
        ):
            assert main(["run", "--serve", "--port", "9000"]) == 0

        application.start.assert_called_once()
        application.stop.assert_called_once()
        assert uvicorn_run.call_args.kwargs["port"] == 9000
        assert uvicorn_run.call_args.kwargs["host"] == "127.0.0.1"
