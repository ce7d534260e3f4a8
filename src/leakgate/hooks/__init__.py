"""Git hook management."""

from leakgate.hooks.installer import HookResult, install_hook, uninstall_hook

__all__ = ["HookResult", "install_hook", "uninstall_hook"]
