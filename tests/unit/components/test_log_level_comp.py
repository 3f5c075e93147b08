"""Unit tests for log level mapping."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from centralconf.components.config.log_level_comp import OFF, TRACE, apply_log_level, canonical_log_level, to_logging_level

TEST_LOGGER = "centralconf.tests.log_level"


@pytest.fixture
def test_logger() -> Generator[logging.Logger, None, None]:
    target = logging.getLogger(TEST_LOGGER)
    yield target
    target.setLevel(logging.NOTSET)


class TestLevelMapping:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("name", "level"),
        [
            ("trace", TRACE),
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("Information", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("critical", logging.CRITICAL),
            ("off", OFF),
            ("NONE", OFF),
        ],
    )
    def test_to_logging_level(self, name: str, level: int) -> None:
        assert to_logging_level(name) == level

    @pytest.mark.unit
    def test_unknown(self) -> None:
        assert canonical_log_level("loud") is None
        with pytest.raises(ValueError):
            to_logging_level("loud")


class TestApplyLogLevel:
    @pytest.mark.unit
    def test_relevels_logger(self, test_logger: logging.Logger) -> None:
        applied = apply_log_level("debug", TEST_LOGGER)

        assert applied == logging.DEBUG
        assert test_logger.level == logging.DEBUG

    @pytest.mark.unit
    def test_off_silences_everything(self, test_logger: logging.Logger) -> None:
        apply_log_level("off", TEST_LOGGER)

        assert not test_logger.isEnabledFor(logging.CRITICAL)
