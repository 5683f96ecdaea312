# src/lossofcharge/log_config.py
import logging
import sys
from typing import TextIO, Union

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, stream: TextIO = sys.stdout):
    """
    Installs a single console handler on the root logger.

    Any handlers left over from a previous call are removed first, so calling
    this again (e.g. from a notebook cell) only changes the level or stream.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.debug("Logging configured at level %s.", logging.getLevelName(level))
