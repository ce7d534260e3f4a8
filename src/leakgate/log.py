"""Logging setup for the CLI — stdlib logging rendered through Rich."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "leakgate-rich"


def configure_logging(
    *, verbose: bool = False, debug: bool = False, console: Optional[Console] = None
) -> None:
    """Attach a RichHandler to the ``leakgate`` logger.

    Level is WARNING by default, INFO with *verbose*, DEBUG with *debug*.
    Calling it again replaces the handler instead of stacking another.
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    root = logging.getLogger("leakgate")
    root.setLevel(level)

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    root.addHandler(handler)
    root.propagate = False
