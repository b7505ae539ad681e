"""
CLI logging bootstrap.
Installs a single Rich handler on stderr early in CLI startup.
"""

import logging
import os

from rich.logging import RichHandler

from .console import err_console

DEFAULT_LEVEL = os.environ.get("IMPORTMAP_LOG_LEVEL", "WARNING").upper()


def init_logging(level: str | None = None) -> None:
    level = (level or DEFAULT_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.WARNING))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, RichHandler):
            root.removeHandler(h)
    root.addHandler(RichHandler(console=err_console, show_path=False, markup=False))
