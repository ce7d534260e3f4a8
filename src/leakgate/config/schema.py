"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class ScanConfig:
    workers: int = 1  # >1 evaluates files on a thread pool
    timeout_seconds: float = 0  # wall-clock budget; 0 disables
    snippet_length: int = 100


@dataclass
class EntropyConfig:
    min_length: int = 16  # shorter matches score 0
    threshold: int = 8  # distinct chars must exceed this


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class PatternsConfig:
    use_defaults: bool = True
    secret: List[Dict[str, Any]] = field(default_factory=list)
    allowlist: List[str] = field(default_factory=list)
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class LeakGateConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    entropy: EntropyConfig = field(default_factory=EntropyConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    patterns: PatternsConfig = field(default_factory=PatternsConfig)
