import logging
import os
import sys

from loguru import logger


class InterceptHandler(logging.Handler):
    """Forward records of the standard logging module (kopf, kubernetes, urllib3) to loguru."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging():
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    logger.remove()
    logger.add(sys.stderr, level=level)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.debug(f"Logging configured with level {level}")
