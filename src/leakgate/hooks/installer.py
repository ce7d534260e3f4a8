"""Pre-commit hook management for ``leakgate install`` / ``uninstall``.

The hook goes wherever git actually runs hooks from, so ``core.hooksPath``
and worktrees work. A pre-commit hook written by another tool is never
destroyed: ``--force`` moves it aside and ``uninstall`` moves it back.
"""

from __future__ import annotations

import logging
import stat
from dataclasses import dataclass
from pathlib import Path

from leakgate.sources.git import GitError, get_hooks_dir

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-commit"
HOOK_MARKER = "# leakgate-hook"
BACKUP_SUFFIX = ".pre-leakgate"

# Fails closed when leakgate is not on PATH, so an unscanned commit never
# slips through a half-uninstalled environment.
_HOOK_SCRIPT = f"""\
#!/bin/sh
{HOOK_MARKER}
# Remove with: leakgate uninstall
if ! command -v leakgate >/dev/null 2>&1; then
    echo "leakgate: command not found, refusing to commit unscanned changes" >&2
    exit 1
fi
exec leakgate scan
"""


@dataclass(frozen=True)
class HookResult:
    ok: bool
    message: str


def _is_leakgate_hook(path: Path) -> bool:
    if not path.is_file():
        return False
    return HOOK_MARKER in path.read_text(encoding="utf-8", errors="replace")


def _backup_path(hook: Path) -> Path:
    return hook.with_name(hook.name + BACKUP_SUFFIX)


def install_hook(repo_root: Path, *, force: bool = False) -> HookResult:
    """Write the leakgate pre-commit hook into the repo's hooks directory."""
    try:
        hooks_dir = get_hooks_dir(repo_root)
    except GitError as exc:
        return HookResult(False, str(exc))
    hook = hooks_dir / HOOK_NAME

    if _is_leakgate_hook(hook):
        return HookResult(True, "leakgate hook is already installed.")

    if hook.exists():
        backup = _backup_path(hook)
        if not force:
            return HookResult(
                False,
                f"{hook} was written by another tool. Re-run with --force to "
                f"move it to {backup.name} and install leakgate in its place.",
            )
        hook.replace(backup)
        logger.info("Moved existing pre-commit hook to %s", backup)

    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook.write_text(_HOOK_SCRIPT, encoding="utf-8")
    hook.chmod(hook.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return HookResult(True, f"Installed leakgate pre-commit hook at {hook}")


def uninstall_hook(repo_root: Path) -> HookResult:
    """Remove the leakgate hook and restore whatever it replaced."""
    try:
        hook = get_hooks_dir(repo_root) / HOOK_NAME
    except GitError as exc:
        return HookResult(False, str(exc))

    if not hook.exists():
        return HookResult(True, "No pre-commit hook installed, nothing to remove.")
    if not _is_leakgate_hook(hook):
        return HookResult(False, f"{hook} was not written by leakgate, leaving it in place.")

    hook.unlink()
    backup = _backup_path(hook)
    if backup.exists():
        backup.replace(hook)
        return HookResult(True, f"Removed leakgate hook and restored the previous {hook}")
    return HookResult(True, f"Removed leakgate pre-commit hook from {hook}")
