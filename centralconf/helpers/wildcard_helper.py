"""
Wildcard matching helpers for matcher-list configuration values.

Pattern grammar:
- `*` matches any (possibly empty) sequence of characters
- matching is case-insensitive by default
- a leading `(?-i)` makes the pattern case-sensitive
- a leading `(?i)` is accepted and stripped (explicit case-insensitive)

Examples:
    "*token*"      matches "X-Auth-Token", "token"
    "/heartbeat*"  matches "/heartbeat", "/heartbeat/ping"
    "(?-i)Secret"  matches "Secret" but not "secret"
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

CASE_SENSITIVE_PREFIX = "(?-i)"
CASE_INSENSITIVE_PREFIX = "(?i)"
WILDCARD = "*"


@dataclass(frozen=True)
class WildcardMatcher:
    """
    Immutable compiled wildcard pattern.

    `pattern` is the original text (including any case prefix) so the matcher
    renders back to exactly what was configured.
    """

    pattern: str
    ignore_case: bool = True
    _parts: tuple[str, ...] = field(default=(), repr=False, compare=False)
    _leading_wildcard: bool = field(default=False, repr=False, compare=False)
    _trailing_wildcard: bool = field(default=False, repr=False, compare=False)

    @classmethod
    def value_of(cls, pattern: str) -> WildcardMatcher:
        """Compile a wildcard pattern string."""
        body = pattern
        ignore_case = True
        if body.startswith(CASE_SENSITIVE_PREFIX):
            ignore_case = False
            body = body[len(CASE_SENSITIVE_PREFIX) :]
        elif body.startswith(CASE_INSENSITIVE_PREFIX):
            body = body[len(CASE_INSENSITIVE_PREFIX) :]

        if ignore_case:
            body = body.lower()

        parts = tuple(p for p in body.split(WILDCARD) if p)
        return cls(
            pattern=pattern,
            ignore_case=ignore_case,
            _parts=parts,
            _leading_wildcard=body.startswith(WILDCARD),
            _trailing_wildcard=body.endswith(WILDCARD),
        )

    def matches(self, value: str) -> bool:
        """Return True if `value` matches this pattern."""
        text = value.lower() if self.ignore_case else value
        parts = self._parts

        if not parts:
            # "" only matches ""; "*", "**" match everything
            return self._leading_wildcard or text == ""

        if len(parts) == 1 and not self._leading_wildcard and not self._trailing_wildcard:
            return text == parts[0]

        pos = 0
        last = len(parts) - 1
        for i, part in enumerate(parts):
            if i == 0 and not self._leading_wildcard:
                if not text.startswith(part):
                    return False
                pos = len(part)
                continue
            if i == last and not self._trailing_wildcard:
                # Last fixed segment must sit at the end, after everything consumed so far
                return len(text) - len(part) >= pos and text.endswith(part)
            found = text.find(part, pos)
            if found == -1:
                return False
            pos = found + len(part)
        return True

    def __str__(self) -> str:
        return self.pattern


def parse_matchers(patterns: Iterable[str]) -> tuple[WildcardMatcher, ...]:
    """Compile patterns, skipping blank entries."""
    return tuple(WildcardMatcher.value_of(p.strip()) for p in patterns if p and p.strip())


def any_match(matchers: Iterable[WildcardMatcher], value: str | None) -> WildcardMatcher | None:
    """Return the first matcher matching `value`, or None."""
    if value is None:
        return None
    for matcher in matchers:
        if matcher.matches(value):
            return matcher
    return None


def is_any_match(matchers: Iterable[WildcardMatcher], value: str | None) -> bool:
    """Return True if any matcher matches `value`."""
    return any_match(matchers, value) is not None
