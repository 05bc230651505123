"""Logging setup for command-line use.

Library modules only create loggers; handlers are installed here.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: int = logging.WARNING, console: Console | None = None) -> None:
    """Install a Rich handler on the root logger.

    Args:
        level: Root log level
        console: Optional Rich console to render to (defaults to stderr)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]
