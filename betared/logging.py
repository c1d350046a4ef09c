"""
Log setup for the betared command line.

Records are written as `LEVEL\tfile:line message`, with the level name
coloured when the stream is a terminal.
"""

import logging
import sys
import traceback
from logging import Formatter, Logger, StreamHandler
from typing import TextIO

FORMAT = "%(levelname)s\t%(filename)s:%(lineno)d %(message)s"
RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[91m",
}


def log_exception(logger: Logger, e: BaseException) -> None:
    """Like logger.exception(e) but usable outside an except block."""
    stack_trace = "".join(traceback.format_exception(type(e), e, e.__traceback__))
    logger.error(f"Caught exception:\n{stack_trace}")


class ColorFormatter(Formatter):
    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{levelname}{RESET}"
        try:
            return super().format(record)
        finally:
            # Other handlers may share this record.
            record.levelname = levelname


def setup_color_logging(
    format: str = FORMAT,
    level: int = logging.INFO,
    *,
    stream: TextIO | None = None,
    color: bool | None = None,
) -> StreamHandler:
    """
    Route betared and `__main__` logs to `stream`, replacing earlier handlers.

    Colour defaults to whether `stream` (by default stderr) is a terminal.
    Returns the installed handler.
    """
    if stream is None:
        stream = sys.stderr
    if color is None:
        color = stream.isatty()
    handler = StreamHandler(stream)
    handler.setFormatter(ColorFormatter(format) if color else Formatter(format))
    for name in ["betared", "__main__"]:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(level)
    return handler
