"""File sources — git queries and file suppliers."""

from leakgate.sources.git import GitError, get_hooks_dir, get_repo_root, get_staged_files
from leakgate.sources.supplier import (
    FileAccessError,
    FileSupplier,
    InMemorySupplier,
    WorkingTreeSupplier,
)

__all__ = [
    "FileAccessError",
    "FileSupplier",
    "GitError",
    "InMemorySupplier",
    "WorkingTreeSupplier",
    "get_hooks_dir",
    "get_repo_root",
    "get_staged_files",
]
