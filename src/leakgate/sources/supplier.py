"""File suppliers — where the scan engine gets paths and lines from.

The engine only ever talks to a ``FileSupplier``, so it can be driven from
the git index, an explicit path list, or plain in-memory data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

_BINARY_SNIFF_BYTES = 8192


class FileAccessError(Exception):
    """Raised when a listed file cannot be read as text."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class FileSupplier:
    """Interface for file enumeration and reading."""

    def paths(self) -> List[str]:
        """Ordered list of candidate file identifiers."""
        raise NotImplementedError

    def is_file(self, path: str) -> bool:
        """True if *path* currently exists as a regular file."""
        raise NotImplementedError

    def read_lines(self, path: str) -> List[str]:
        """Return the lines of *path* without line terminators.

        Raises FileAccessError if the file cannot be read as text.
        """
        raise NotImplementedError


class WorkingTreeSupplier(FileSupplier):
    """Reads files from disk, relative to *root*."""

    def __init__(self, root: Path, paths: Iterable[str]) -> None:
        self.root = root
        self._paths = list(paths)

    def paths(self) -> List[str]:
        return list(self._paths)

    def _resolve(self, path: str) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.root / p

    def is_file(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def read_lines(self, path: str) -> List[str]:
        try:
            data = self._resolve(path).read_bytes()
        except FileNotFoundError:
            raise FileAccessError(path, "missing") from None
        except OSError as exc:
            raise FileAccessError(path, f"unreadable ({exc.strerror or exc})") from None
        if b"\0" in data[:_BINARY_SNIFF_BYTES]:
            raise FileAccessError(path, "binary")
        text = data.decode("utf-8", errors="replace").lstrip("\ufeff")
        # Split on \n only so numbering agrees with editors and git.
        lines = [line.rstrip("\r") for line in text.split("\n")]
        if lines and lines[-1] == "":
            lines.pop()
        return lines


class InMemorySupplier(FileSupplier):
    """Fixed ``(path, lines)`` input. Every listed path counts as existing.

    A path is one file, so repeated entries for the same path are merged:
    the path keeps the position of its first entry, takes the lines of its
    last entry, and is scanned once.
    """

    def __init__(self, files: Iterable[Tuple[str, Sequence[str]]]) -> None:
        self._order: List[str] = []
        self._files: Dict[str, List[str]] = {}
        for path, lines in files:
            if path not in self._files:
                self._order.append(path)
            self._files[path] = list(lines)

    def paths(self) -> List[str]:
        return list(self._order)

    def is_file(self, path: str) -> bool:
        return path in self._files

    def read_lines(self, path: str) -> List[str]:
        try:
            return list(self._files[path])
        except KeyError:
            raise FileAccessError(path, "missing") from None
