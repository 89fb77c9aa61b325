"""
Logging setup for jsontree applications.

Library modules only call ``logging.getLogger(__name__)``; configuring
handlers is left to the application. The CLI calls `setup_logging` once at
startup, which routes the root logger through rich.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def setup_logging(level: Union[str, int] = "WARNING", console: Optional[Console] = None) -> None:
    """
    Configure the root logger with a rich handler.

    Calling this more than once is safe; the handler is only added once.

    Parameters
    ----------
    level : str or int
        Logging level, e.g. "DEBUG" or logging.INFO.
    console : rich.console.Console, optional
        Console to log to. Defaults to stderr.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    _CONFIGURED = True
