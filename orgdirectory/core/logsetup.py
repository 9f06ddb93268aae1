from __future__ import annotations

import logging

from orgdirectory.core.config import log_level

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a root handler once and apply the configured level to the package logger."""

    resolved = level or log_level()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("orgdirectory").setLevel(resolved)
