"""Finding models and display helpers."""

from leakgate.findings.models import Finding, ScanResult, SkippedFile, Verdict
from leakgate.findings.redactor import redact, truncate

__all__ = ["Finding", "ScanResult", "SkippedFile", "Verdict", "redact", "truncate"]
