"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from leakgate.findings.models import ScanResult
from leakgate.findings.redactor import REDACTED, redact


def to_dict(result: ScanResult, *, ci_mode: bool = True) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    findings_list: List[Dict[str, Any]] = []
    for f in result.findings:
        findings_list.append({
            "file": f.file,
            "line": f.line_no,
            "pattern": f.pattern_id,
            "category": f.category,
            "value": redact(f.matched_value, ci_mode=ci_mode),
            "snippet": REDACTED if ci_mode else f.snippet,
        })

    return {
        "version": "1.0",
        "verdict": result.verdict.value,
        "scanned_files": result.scanned_files,
        "total_findings": result.total_findings,
        "findings": findings_list,
        "skipped_files": [
            {"path": s.path, "reason": s.reason} for s in result.skipped_files
        ],
        "scan_duration_ms": result.scan_duration_ms,
    }


def render(result: ScanResult, *, ci_mode: bool = True) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, ci_mode=ci_mode), indent=2)
