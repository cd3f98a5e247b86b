"""
Logging helpers for SysML-lite.

Library modules only create loggers; handlers are installed by applications
(the ``sysml-parse`` command calls ``configure_logging``).

Example:
    >>> from sysml.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.error("Parse error: %s", message)
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger namespaced under ``sysml``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance
    """
    if not (name == "sysml" or name.startswith("sysml.")):
        name = f"sysml.{name}"
    return logging.getLogger(name)


def configure_logging(level: int = logging.WARNING, console: Optional[Console] = None) -> logging.Logger:
    """
    Send ``sysml`` log records to stderr through rich.

    Calling it again replaces the previously installed handler.
    """
    root = logging.getLogger("sysml")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
    return root
