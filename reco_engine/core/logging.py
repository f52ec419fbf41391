# reco_engine/core/logging.py
import logging
import sys
from typing import Optional

import colorlog

from reco_engine.core.config import get_settings

LOG_FORMAT = "%(log_color)s%(asctime)s %(levelname)-8s [%(name)s]%(reset)s %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def configure_logging(level: Optional[int] = None) -> int:
    """
    Install one colored stdout handler on the root logger.
    Without an explicit level, DEBUG settings switch on per-order ranking detail.
    Returns the level applied.
    """
    if level is None:
        level = logging.DEBUG if get_settings().DEBUG else logging.INFO

    handler = colorlog.StreamHandler(sys.stdout)
    handler.setFormatter(colorlog.ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]
    logging.getLogger("reco_engine").setLevel(level)
    return level
