"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Verdict(str, Enum):
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class Finding:
    """One suspected secret at a specific file and line."""

    file: str
    line_no: int  # 1-based
    pattern_id: str
    category: str
    matched_value: str  # truncated for display
    snippet: str  # leading part of the offending line


@dataclass(frozen=True)
class SkippedFile:
    """A listed file that was not scanned."""

    path: str
    reason: str  # 'excluded', 'missing', 'unreadable', 'binary'


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    findings: List[Finding] = field(default_factory=list)
    skipped_files: List[SkippedFile] = field(default_factory=list)
    scanned_files: int = 0
    scan_duration_ms: float = field(default=0.0, compare=False)

    @property
    def verdict(self) -> Verdict:
        return Verdict.FAIL if self.findings else Verdict.PASS

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.PASS

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1
