"""Git subprocess wrapper — repo root and staged file list."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: List[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise GitError(f"git error: {stderr or f'exit status {result.returncode}'}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_staged_files(repo_root: Path) -> List[str]:
    """Return staged paths that were added, copied, or modified.

    Deleted files are left out by the filter; renames show up under their
    new name as additions.
    """
    output = _run_git(
        ["diff", "--cached", "--name-only", "--diff-filter=ACM", "--no-color"],
        cwd=repo_root,
    )
    return [line for line in output.splitlines() if line.strip()]


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the directory git runs hooks from.

    Honours ``core.hooksPath`` and linked worktrees.
    """
    out = _run_git(["rev-parse", "--git-path", "hooks"], cwd=repo_root).strip()
    hooks = Path(out)
    return hooks if hooks.is_absolute() else repo_root / hooks
