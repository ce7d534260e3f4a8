"""Pattern data models — regex stored as string, compiled at construction.

Compilation happens in ``__post_init__`` so a broken regex surfaces the
moment a catalog is built, never halfway through a scan.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from leakgate.config.loader import ConfigError


class PatternError(ConfigError):
    """Raised when a catalog entry cannot be compiled or is malformed."""


class ConfidenceClass(str, Enum):
    ALWAYS_HIGH = "always_high"  # reported on match, entropy ignored
    ENTROPY_GATED = "entropy_gated"  # reported only if the match scores high


def _compile(pattern: str, flags: int, what: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise PatternError(f"Invalid {what} regex {pattern!r}: {exc}") from exc


@dataclass(frozen=True)
class SecretPattern:
    """A credential signature.

    ``category`` is the label shown to the user. When ``pattern`` defines a
    named group ``secret`` that group is taken as the matched value, otherwise
    the whole match is.
    """

    id: str
    category: str
    pattern: str
    confidence: ConfidenceClass = ConfidenceClass.ENTROPY_GATED

    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "compiled", _compile(self.pattern, 0, f"secret pattern {self.id}")
        )

    @property
    def always_high(self) -> bool:
        return self.confidence is ConfidenceClass.ALWAYS_HIGH

    def first_match(self, text: str) -> Optional[str]:
        """Return the first matching substring of *text*, or None."""
        m = self.compiled.search(text)
        if m is None:
            return None
        if "secret" in m.groupdict() and m.group("secret") is not None:
            return m.group("secret")
        return m.group(0)


@dataclass(frozen=True)
class AllowlistPattern:
    """Suppresses every finding on a line it matches (case-insensitive)."""

    pattern: str

    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "compiled", _compile(self.pattern, re.IGNORECASE, "allowlist")
        )

    def matches(self, line: str) -> bool:
        return self.compiled.search(line) is not None


@dataclass(frozen=True)
class ExcludePathRule:
    """A file whose path this regex finds is never read."""

    pattern: str

    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "compiled", _compile(self.pattern, 0, "exclude path")
        )

    def matches(self, path: str) -> bool:
        return self.compiled.search(path) is not None
