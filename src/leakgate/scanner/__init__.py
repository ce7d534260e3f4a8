"""Scanner — coordinator, line evaluator, file filter, entropy scoring."""

from leakgate.scanner.engine import ScanCoordinator, ScanError, ScanTimeout, scan_files
from leakgate.scanner.entropy import EntropyScorer, distinct_char_score
from leakgate.scanner.evaluator import LineEvaluator
from leakgate.scanner.file_filter import FileFilter

__all__ = [
    "EntropyScorer",
    "FileFilter",
    "LineEvaluator",
    "ScanCoordinator",
    "ScanError",
    "ScanTimeout",
    "distinct_char_score",
    "scan_files",
]
