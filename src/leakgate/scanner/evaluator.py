"""Per-line detection — allowlist, pattern match, confidence gate."""

from __future__ import annotations

from typing import List, Optional

from leakgate.catalog.registry import PatternCatalog
from leakgate.findings.models import Finding
from leakgate.findings.redactor import truncate
from leakgate.scanner.entropy import EntropyScorer

MATCH_DISPLAY_LENGTH = 64
DEFAULT_SNIPPET_LENGTH = 100


class LineEvaluator:
    """Evaluate single lines against a catalog.

    Stateless between calls, so one instance can serve several threads.
    """

    def __init__(
        self,
        catalog: PatternCatalog,
        scorer: Optional[EntropyScorer] = None,
        *,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
    ) -> None:
        self.catalog = catalog
        self.scorer = scorer or EntropyScorer()
        self.snippet_length = snippet_length

    def is_allowlisted(self, line: str) -> bool:
        return any(p.matches(line) for p in self.catalog.allowlist)

    def evaluate(self, file: str, line_no: int, line: str) -> List[Finding]:
        """Return the findings for one line: zero or one.

        The allowlist is consulted first and wins outright. After that the
        first secret pattern whose match passes the confidence gate is
        reported and the rest are not tried.
        """
        if not line or self.is_allowlisted(line):
            return []

        for pattern in self.catalog.secret_patterns:
            matched = pattern.first_match(line)
            if matched is None:
                continue
            if not (pattern.always_high or self.scorer.is_high_confidence(matched)):
                continue
            return [
                Finding(
                    file=file,
                    line_no=line_no,
                    pattern_id=pattern.id,
                    category=pattern.category,
                    matched_value=truncate(matched, MATCH_DISPLAY_LENGTH),
                    snippet=truncate(line.strip(), self.snippet_length),
                )
            ]
        return []
