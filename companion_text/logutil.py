from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the companion text plugin.

    Inside the image viewer the host configures handlers. Standalone (tests,
    companionctl) this falls back to standard Python logging.
    """

    logger = logging.getLogger(name)
    if not logger.handlers:
        logging.basicConfig(level=logging.INFO)
    return logger
