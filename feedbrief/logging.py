"""Logging setup."""

import logging
from typing import Union

from rich.logging import RichHandler


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Route stdlib logging through a rich handler on the root logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
