"""Path eligibility — exclusion rules plus an existence check."""

from __future__ import annotations

from typing import Optional

from leakgate.catalog.registry import PatternCatalog
from leakgate.sources.supplier import FileSupplier


class FileFilter:
    """Decide whether a path may be scanned, without reading it."""

    def __init__(self, catalog: PatternCatalog, supplier: FileSupplier) -> None:
        self._rules = catalog.exclude_paths
        self._supplier = supplier

    def skip_reason(self, path: str) -> Optional[str]:
        """Return why *path* is ineligible, or None if it may be scanned."""
        if any(rule.matches(path) for rule in self._rules):
            return "excluded"
        if not self._supplier.is_file(path):
            return "missing"
        return None

    def is_eligible(self, path: str) -> bool:
        return self.skip_reason(path) is None
