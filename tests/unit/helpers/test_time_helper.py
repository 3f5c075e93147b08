"""
Unit tests for centralconf.helpers.time_helper module.
"""

import pytest

from centralconf.helpers.time_helper import format_interval, internal_s, now_ms


class TestNowMs:
    """Tests for now_ms function."""

    @pytest.mark.unit
    def test_now_ms_is_reasonable_timestamp(self) -> None:
        """now_ms should return a timestamp in milliseconds (roughly current epoch)."""
        result = now_ms()
        assert isinstance(result, int)
        assert result > 1577836800000
        assert result < 4102444800000


class TestInternalS:
    @pytest.mark.unit
    def test_monotonic(self) -> None:
        first = internal_s()
        assert internal_s() >= first


class TestFormatInterval:
    """Tests for format_interval function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (300, "5m"),
            (5, "5s"),
            (65.5, "1m 5.5s"),
            (0, "0s"),
            (3600, "1h"),
            (3725, "1h 2m 5s"),
            (-5, "-5s"),
        ],
    )
    def test_format(self, seconds: float, expected: str) -> None:
        assert format_interval(seconds) == expected
