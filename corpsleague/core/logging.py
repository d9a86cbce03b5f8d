# corpsleague/core/logging.py
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Root handler for the service; module loggers propagate to it."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("corpsleague").setLevel(level)
