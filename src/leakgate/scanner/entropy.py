"""Distinct-character confidence scoring.

The score is the number of distinct characters in a match. It is a cheap
stand-in for randomness, not Shannon entropy: short or low-variety secrets
slip through, in exchange for a constant-time check per match.
"""

from __future__ import annotations

DEFAULT_MIN_LENGTH = 16
DEFAULT_THRESHOLD = 8


def distinct_char_score(s: str, min_length: int = DEFAULT_MIN_LENGTH) -> int:
    """Return the distinct-character count of *s*, or 0 if it is too short."""
    if len(s) < min_length:
        return 0
    return len(set(s))


class EntropyScorer:
    """Scores matched substrings and applies the high-confidence threshold."""

    def __init__(
        self,
        min_length: int = DEFAULT_MIN_LENGTH,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        self.min_length = min_length
        self.threshold = threshold

    def score(self, substring: str) -> int:
        return distinct_char_score(substring, self.min_length)

    def is_high_confidence(self, substring: str) -> bool:
        """True when the score strictly exceeds the threshold."""
        return self.score(substring) > self.threshold
