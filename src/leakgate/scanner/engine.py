"""Scan coordinator — drives filtering and line evaluation over all files.

Exception safety: unexpected errors are re-raised as ScanError with a
message built from counts only, so matched secret values never end up in
tracebacks or CI logs.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from leakgate.catalog.registry import PatternCatalog
from leakgate.config.schema import LeakGateConfig
from leakgate.findings.models import Finding, ScanResult, SkippedFile
from leakgate.scanner.entropy import EntropyScorer
from leakgate.scanner.evaluator import DEFAULT_SNIPPET_LENGTH, LineEvaluator
from leakgate.scanner.file_filter import FileFilter
from leakgate.sources.supplier import FileAccessError, FileSupplier, InMemorySupplier

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised on internal scanner error (never contains secret values)."""


class ScanTimeout(ScanError):
    """Raised when a scan exceeds its wall-clock budget."""


@dataclass
class _FileOutcome:
    path: str
    findings: List[Finding] = field(default_factory=list)
    skipped: Optional[str] = None  # skip reason; None means scanned


class ScanCoordinator:
    """Run a full scan over the files a supplier provides."""

    def __init__(
        self,
        catalog: PatternCatalog,
        supplier: FileSupplier,
        *,
        scorer: Optional[EntropyScorer] = None,
        workers: int = 1,
        timeout_seconds: Optional[float] = None,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
    ) -> None:
        self.supplier = supplier
        self.file_filter = FileFilter(catalog, supplier)
        self.evaluator = LineEvaluator(catalog, scorer, snippet_length=snippet_length)
        self.workers = max(1, workers)
        self.timeout_seconds = timeout_seconds or None

    @classmethod
    def from_config(
        cls, catalog: PatternCatalog, supplier: FileSupplier, config: LeakGateConfig
    ) -> "ScanCoordinator":
        return cls(
            catalog,
            supplier,
            scorer=EntropyScorer(config.entropy.min_length, config.entropy.threshold),
            workers=config.scan.workers,
            timeout_seconds=config.scan.timeout_seconds,
            snippet_length=config.scan.snippet_length,
        )

    # ---- per file ----

    def _scan_file(self, path: str) -> _FileOutcome:
        reason = self.file_filter.skip_reason(path)
        if reason is not None:
            logger.debug("Skipping %s (%s)", path, reason)
            return _FileOutcome(path, skipped=reason)

        try:
            lines = self.supplier.read_lines(path)
        except FileAccessError as exc:
            logger.info("Skipping %s (%s)", path, exc.reason)
            return _FileOutcome(path, skipped=exc.reason)

        findings: List[Finding] = []
        for line_no, line in enumerate(lines, 1):
            findings.extend(self.evaluator.evaluate(path, line_no, line))
        return _FileOutcome(path, findings=findings)

    # ---- traversal ----

    def _remaining(self, deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        return deadline - time.monotonic()

    def _check_deadline(self, deadline: Optional[float], done: int, total: int) -> None:
        remaining = self._remaining(deadline)
        if remaining is not None and remaining <= 0:
            raise ScanTimeout(
                f"Scan exceeded its {self.timeout_seconds}s budget "
                f"after {done} of {total} files"
            )

    def _run_serial(self, paths: Sequence[str], deadline: Optional[float]) -> List[_FileOutcome]:
        outcomes: List[_FileOutcome] = []
        for path in paths:
            self._check_deadline(deadline, len(outcomes), len(paths))
            outcomes.append(self._scan_file(path))
        return outcomes

    def _run_parallel(self, paths: Sequence[str], deadline: Optional[float]) -> List[_FileOutcome]:
        """Scan on a thread pool, keeping results in input order.

        On timeout the pending files are cancelled, but a worker already
        inside ``read_lines`` cannot be interrupted. It finishes in the
        background and the interpreter waits for it before exiting, so a
        supplier that blocks forever will still hold up process exit.
        """
        # Executor.map yields in submission order, which keeps the report
        # in input order no matter which file finishes first.
        executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="leakgate")
        try:
            return list(executor.map(self._scan_file, paths, timeout=self._remaining(deadline)))
        except FuturesTimeoutError:
            raise ScanTimeout(
                f"Scan exceeded its {self.timeout_seconds}s budget ({len(paths)} files queued)"
            ) from None
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def scan(self, paths: Optional[Sequence[str]] = None) -> ScanResult:
        """Scan *paths* (default: everything the supplier lists)."""
        start = time.perf_counter()
        paths = list(self.supplier.paths() if paths is None else paths)
        deadline = (
            time.monotonic() + self.timeout_seconds if self.timeout_seconds else None
        )

        try:
            if self.workers > 1 and len(paths) > 1:
                outcomes = self._run_parallel(paths, deadline)
            else:
                outcomes = self._run_serial(paths, deadline)
            # A file that overruns the budget must not count as a clean pass.
            self._check_deadline(deadline, len(outcomes), len(paths))
        except ScanError:
            raise
        except Exception as exc:
            raise ScanError(
                f"Internal scanner error ({type(exc).__name__}) while scanning "
                f"{len(paths)} files. Matched values have been withheld."
            ) from None

        result = ScanResult()
        for outcome in outcomes:
            if outcome.skipped is not None:
                result.skipped_files.append(SkippedFile(outcome.path, outcome.skipped))
                continue
            result.scanned_files += 1
            result.findings.extend(outcome.findings)

        result.scan_duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "Scanned %d file(s), skipped %d, %d finding(s)",
            result.scanned_files,
            len(result.skipped_files),
            result.total_findings,
        )
        return result


def scan_files(
    files: Iterable[Tuple[str, Sequence[str]]],
    catalog: Optional[PatternCatalog] = None,
    **kwargs,
) -> ScanResult:
    """Scan in-memory ``(path, lines)`` pairs. Uses the built-in catalog by default."""
    supplier = InMemorySupplier(files)
    coordinator = ScanCoordinator(catalog or PatternCatalog.default(), supplier, **kwargs)
    return coordinator.scan()
