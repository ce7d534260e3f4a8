"""Tests for the scan coordinator — end-to-end through the engine."""

import threading
import time
from pathlib import Path

import pytest

from leakgate.catalog.registry import PatternCatalog
from leakgate.config.schema import LeakGateConfig
from leakgate.findings.models import Verdict
from leakgate.scanner.engine import ScanCoordinator, ScanError, ScanTimeout, scan_files
from leakgate.sources.supplier import (
    FileAccessError,
    InMemorySupplier,
    WorkingTreeSupplier,
)


class TestScenarios:
    def test_aws_key_in_config(self, aws_key):
        result = scan_files([("config.py", [f'aws_key = "{aws_key}"'])])
        assert result.scanned_files == 1
        assert len(result.findings) == 1
        assert result.findings[0].category == "AWS token"
        assert result.findings[0].line_no == 1
        assert result.verdict is Verdict.FAIL
        assert result.exit_code == 1

    def test_placeholder_readme(self):
        result = scan_files([("README.md", ["Use YOUR_API_KEY_HERE as a placeholder"])])
        assert result.findings == []
        assert result.verdict is Verdict.PASS
        assert result.exit_code == 0

    def test_empty_input(self):
        result = scan_files([])
        assert result.scanned_files == 0
        assert result.verdict is Verdict.PASS
        assert result.exit_code == 0

    def test_node_modules_excluded(self, github_token):
        result = scan_files([("node_modules/pkg/index.js", [f'const t = "{github_token}";'])])
        assert result.findings == []
        assert result.scanned_files == 0
        assert result.verdict is Verdict.PASS
        assert [s.reason for s in result.skipped_files] == ["excluded"]


class TestOrderingAndCounting:
    def test_file_then_line_order(self, aws_key, github_token, pem_line):
        files = [
            ("b.py", ["x = 1", f"k = '{aws_key}'", pem_line]),
            ("a.js", [f"t = '{github_token}'"]),
        ]
        result = scan_files(files)
        assert [(f.file, f.line_no) for f in result.findings] == [
            ("b.py", 2),
            ("b.py", 3),
            ("a.js", 1),
        ]

    def test_clean_file_counts_as_scanned(self):
        result = scan_files([("a.py", ["print('hi')"]), ("b.py", [])])
        assert result.scanned_files == 2
        assert result.passed

    def test_idempotent(self, aws_key, pem_line):
        files = [("a.py", [f"k = '{aws_key}'"]), ("k.pem", [pem_line, "MIIE"])]
        catalog = PatternCatalog.default()
        first = scan_files(files, catalog)
        second = scan_files(files, catalog)
        assert first == second
        assert first.findings == second.findings

    def test_parallel_preserves_input_order(self, aws_key):
        files = [(f"f{i:02d}.py", ["pass", f"k = '{aws_key}'"]) for i in range(20)]
        serial = scan_files(files)
        parallel = scan_files(files, workers=4)
        assert parallel == serial
        assert [f.file for f in parallel.findings] == [f"f{i:02d}.py" for i in range(20)]

    def test_repeated_path_scanned_once_with_last_lines(self, aws_key):
        files = [("a.py", [f"k = '{aws_key}'"]), ("b.py", ["x"]), ("a.py", ["clean = 1"])]
        result = scan_files(files)
        assert result.scanned_files == 2
        assert result.passed
        assert InMemorySupplier(files).paths() == ["a.py", "b.py"]


class _FlakySupplier(InMemorySupplier):
    """Reports every file as present but fails to read some of them."""

    def __init__(self, files, unreadable):
        super().__init__(files)
        self.unreadable = set(unreadable)

    def read_lines(self, path):
        if path in self.unreadable:
            raise FileAccessError(path, "binary")
        return super().read_lines(path)


class TestFileAccess:
    def test_unreadable_file_skipped(self, aws_key):
        supplier = _FlakySupplier(
            [("img.png", [f"{aws_key}"]), ("ok.py", ["x = 1"])],
            unreadable=["img.png"],
        )
        result = ScanCoordinator(PatternCatalog.default(), supplier).scan()
        assert result.scanned_files == 1
        assert result.passed
        assert [(s.path, s.reason) for s in result.skipped_files] == [("img.png", "binary")]

    def test_explicit_paths_override_supplier_list(self):
        supplier = InMemorySupplier([("a.py", ["x"]), ("b.py", ["y"])])
        result = ScanCoordinator(PatternCatalog.default(), supplier).scan(["b.py", "gone.py"])
        assert result.scanned_files == 1
        assert [(s.path, s.reason) for s in result.skipped_files] == [("gone.py", "missing")]


class TestWorkingTree:
    def test_reads_from_disk(self, tmp_path: Path, aws_key):
        (tmp_path / "app.py").write_text(f"import os\nKEY = '{aws_key}'\n")
        supplier = WorkingTreeSupplier(tmp_path, ["app.py"])
        result = ScanCoordinator(PatternCatalog.default(), supplier).scan()
        assert [(f.file, f.line_no) for f in result.findings] == [("app.py", 2)]

    def test_deleted_file_not_counted(self, tmp_path: Path):
        supplier = WorkingTreeSupplier(tmp_path, ["deleted.py"])
        result = ScanCoordinator(PatternCatalog.default(), supplier).scan()
        assert result.scanned_files == 0
        assert result.passed

    def test_binary_file_skipped(self, tmp_path: Path, aws_key):
        (tmp_path / "blob.bin").write_bytes(b"\x00\x01" + aws_key.encode())
        supplier = WorkingTreeSupplier(tmp_path, ["blob.bin"])
        result = ScanCoordinator(PatternCatalog.default(), supplier).scan()
        assert result.scanned_files == 0
        assert result.skipped_files[0].reason == "binary"

    def test_crlf_and_bom(self, tmp_path: Path, aws_key):
        (tmp_path / "w.py").write_bytes(
            b"\xef\xbb\xbfx = 1\r\n" + f"k = '{aws_key}'\r\n".encode()
        )
        supplier = WorkingTreeSupplier(tmp_path, ["w.py"])
        assert supplier.read_lines("w.py") == ["x = 1", f"k = '{aws_key}'"]


class TestBudget:
    def test_zero_budget_disables_timeout(self, aws_key):
        result = scan_files([("a.py", [aws_key])], timeout_seconds=0)
        assert not result.passed

    def test_serial_timeout_fails_closed(self):
        class SlowSupplier(InMemorySupplier):
            def read_lines(self, path):
                time.sleep(0.05)
                return super().read_lines(path)

        supplier = SlowSupplier([(f"f{i}.py", ["x"]) for i in range(10)])
        coordinator = ScanCoordinator(PatternCatalog.default(), supplier, timeout_seconds=0.01)
        with pytest.raises(ScanTimeout):
            coordinator.scan()

    def test_single_slow_file_fails_closed(self):
        class SlowSupplier(InMemorySupplier):
            def read_lines(self, path):
                time.sleep(0.2)
                return super().read_lines(path)

        supplier = SlowSupplier([("a.py", ["x"])])
        coordinator = ScanCoordinator(PatternCatalog.default(), supplier, timeout_seconds=0.01)
        with pytest.raises(ScanTimeout, match="after 1 of 1 files"):
            coordinator.scan()

    def test_fast_scan_within_budget(self, aws_key):
        result = scan_files([("a.py", [aws_key])], timeout_seconds=30)
        assert not result.passed

    def test_parallel_timeout_fails_closed(self):
        release = threading.Event()

        class BlockingSupplier(InMemorySupplier):
            def read_lines(self, path):
                release.wait(5)
                return super().read_lines(path)

        supplier = BlockingSupplier([("a.py", ["x"]), ("b.py", ["y"])])
        coordinator = ScanCoordinator(
            PatternCatalog.default(), supplier, workers=2, timeout_seconds=0.05
        )
        started = time.monotonic()
        try:
            with pytest.raises(ScanTimeout):
                coordinator.scan()
            # returns on budget, not when the blocked workers finish
            assert time.monotonic() - started < 2
        finally:
            release.set()

    def test_timeout_is_a_scan_error(self):
        assert issubclass(ScanTimeout, ScanError)


class TestExceptionSafety:
    def test_internal_error_scrubbed(self, aws_key):
        class BrokenSupplier(InMemorySupplier):
            def read_lines(self, path):
                raise RuntimeError(f"boom {aws_key}")

        supplier = BrokenSupplier([("a.py", ["x"])])
        with pytest.raises(ScanError) as excinfo:
            ScanCoordinator(PatternCatalog.default(), supplier).scan()
        assert aws_key not in str(excinfo.value)
        assert excinfo.value.__cause__ is None


class TestFromConfig:
    def test_entropy_settings_applied(self):
        cfg = LeakGateConfig()
        cfg.entropy.threshold = 100  # nothing entropy-gated can pass
        blob = "Zm9vYmFyYmF6cXV4MTIzNDU2Nzg5MGFiY2RlZmdoaWprbG1u"
        supplier = InMemorySupplier([("d.txt", [blob])])
        coordinator = ScanCoordinator.from_config(PatternCatalog.default(), supplier, cfg)
        assert coordinator.scan().passed

    def test_snippet_length_applied(self, aws_key):
        cfg = LeakGateConfig()
        cfg.scan.snippet_length = 10
        supplier = InMemorySupplier([("a.py", [f"key_value = '{aws_key}'"])])
        result = ScanCoordinator.from_config(PatternCatalog.default(), supplier, cfg).scan()
        assert len(result.findings[0].snippet) == 10
