"""Console logging for the ``specref`` CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; this
module attaches a :class:`rich.logging.RichHandler` writing to stderr so that
stdout stays reserved for resolved data.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def setup_logging(level: Optional[str] = None) -> None:
    """Configure stderr logging for the ``specref`` logger tree.

    Safe to call multiple times.

    Level resolution (first match wins):
      1) argument ``level``
      2) env var ``SPECREF_LOG_LEVEL``
      3) default = ``"WARNING"``
    """
    if level is None:
        level = os.environ.get("SPECREF_LOG_LEVEL", "WARNING")

    level = str(level).upper().strip()
    if level not in _LEVELS:
        level = "WARNING"

    logger = logging.getLogger("specref")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
