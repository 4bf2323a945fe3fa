"""Public entry points: build a matcher from patterns and search subjects."""

from __future__ import annotations

from typing import Iterable

from acmatch.fast import FastAutomaton
from acmatch.slow import MatchResult, PatternLike, SlowAutomaton

# Pattern indices are stored in 16 bits, offset by one, so the pattern set
# must stay below this many entries.
PATTERN_LIMIT = 65535


class TooManyPatternsError(ValueError):
    """Raised when a pattern set has too many entries to be encoded."""

    def __init__(self, count: int) -> None:
        super().__init__(
            f"{count} patterns given; at most {PATTERN_LIMIT - 1} are supported"
        )
        self.count = count


class PatternMatcher:
    """Multi-pattern matcher over byte strings.

    Patterns and subjects may be bytes-like objects or text, which is encoded
    as UTF-8.  Positions in results are byte offsets, and ``end`` is
    inclusive: the match is ``subject[begin:end + 1]``.
    """

    def __init__(self, patterns: Iterable[PatternLike]) -> None:
        pattern_list = list(patterns)
        if len(pattern_list) >= PATTERN_LIMIT:
            raise TooManyPatternsError(len(pattern_list))
        slow = SlowAutomaton(pattern_list)
        self.patterns: tuple[bytes, ...] = slow.patterns
        self._fast = FastAutomaton(slow)

    def __repr__(self) -> str:
        return f"PatternMatcher({len(self.patterns)} patterns)"

    def match(self, subject: PatternLike) -> MatchResult | None:
        """Return the first match in *subject*, or None."""
        return self._fast.match(subject)

    def match_begin(self, subject: PatternLike) -> int | None:
        """Return the offset where the first match begins, or None."""
        result = self._fast.match(subject)
        return result.begin if result is not None else None

    def match_longest(self, subject: PatternLike) -> MatchResult | None:
        """Return the left-most longest match in *subject*, or None."""
        return self._fast.match_longest(subject)


def create(patterns: Iterable[PatternLike]) -> PatternMatcher:
    """Build a :class:`PatternMatcher` for *patterns*."""
    return PatternMatcher(patterns)