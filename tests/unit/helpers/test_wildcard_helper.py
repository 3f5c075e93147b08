"""Unit tests for centralconf.helpers.wildcard_helper."""

from __future__ import annotations

import pytest

from centralconf.helpers.wildcard_helper import WildcardMatcher, any_match, is_any_match, parse_matchers


class TestWildcardMatcher:
    """Tests for WildcardMatcher.matches()."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("pattern", "value", "expected"),
        [
            ("*token*", "X-Auth-Token", True),
            ("*token*", "token", True),
            ("*token*", "toke", False),
            ("/heartbeat*", "/heartbeat", True),
            ("/heartbeat*", "/heartbeat/ping", True),
            ("/heartbeat*", "/api/heartbeat", False),
            ("*.js", "/static/app.js", True),
            ("*.js", "/static/app.json", False),
            ("password", "PASSWORD", True),
            ("password", "passwords", False),
            ("a*b*c", "axxbyyc", True),
            ("a*b*c", "axxcyyb", False),
            ("ab*ba", "aba", False),
            ("*", "anything", True),
            ("*", "", True),
            ("", "", True),
            ("", "x", False),
        ],
    )
    def test_matches(self, pattern: str, value: str, expected: bool) -> None:
        assert WildcardMatcher.value_of(pattern).matches(value) is expected

    @pytest.mark.unit
    def test_case_sensitive_prefix(self) -> None:
        """(?-i) should make the pattern case-sensitive."""
        matcher = WildcardMatcher.value_of("(?-i)Secret*")

        assert matcher.matches("SecretKey")
        assert not matcher.matches("secretkey")
        assert matcher.ignore_case is False

    @pytest.mark.unit
    def test_case_insensitive_prefix_is_stripped(self) -> None:
        """(?i) is accepted and behaves like the default."""
        matcher = WildcardMatcher.value_of("(?i)secret")

        assert matcher.matches("SECRET")
        assert str(matcher) == "(?i)secret"

    @pytest.mark.unit
    def test_str_renders_original_pattern(self) -> None:
        assert str(WildcardMatcher.value_of("*Token*")) == "*Token*"

    @pytest.mark.unit
    def test_equality_uses_pattern(self) -> None:
        assert WildcardMatcher.value_of("*a*") == WildcardMatcher.value_of("*a*")


class TestMatcherLists:
    """Tests for parse_matchers / any_match / is_any_match."""

    @pytest.mark.unit
    def test_parse_matchers_skips_blank_entries(self) -> None:
        matchers = parse_matchers(["*.css", " ", "", " /health "])

        assert [str(m) for m in matchers] == ["*.css", "/health"]

    @pytest.mark.unit
    def test_any_match_returns_first_matching(self) -> None:
        matchers = parse_matchers(["*.png", "/static/*"])

        assert str(any_match(matchers, "/static/logo.png")) == "*.png"
        assert any_match(matchers, "/api/orders") is None

    @pytest.mark.unit
    def test_none_never_matches(self) -> None:
        assert not is_any_match(parse_matchers(["*"]), None)
