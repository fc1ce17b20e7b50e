"""
Logging setup for the Notes API.

Modules log through ``logging.getLogger(__name__)``; this module only
attaches handlers to the root logger.  Account and note services log
mutations at ``INFO``, degraded reads at ``WARNING`` and failed writes
at ``ERROR``, so ``LOG_LEVEL=WARNING`` keeps only the storage trouble.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Does nothing if the root logger already has handlers, e.g. under
    pytest or when ``create_app`` runs twice.  Unknown level names fall
    back to ``INFO``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
