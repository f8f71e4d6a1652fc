"""
Logging helpers.
"""

import logging
import sys

_ROOT = "salon"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``salon`` namespace, e.g. ``salon.guard``."""
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``salon`` logger tree."""
    logger = logging.getLogger(_ROOT)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(getattr(h, "_salon_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._salon_handler = True
        logger.addHandler(handler)

    logger.propagate = False
