"""
Logging setup for applications using payjp-core.
Routes everything through loguru and intercepts standard library logging.

The library itself only emits through `loguru.logger`; call setup_logging()
from your application if you want the default sink.
"""

import logging
import sys

from loguru import logger


class InterceptHandler(logging.Handler):
    """
    Handler that forwards standard library log records to loguru.
    See: https://loguru.readthedocs.io/en/stable/overview.html#entirely-compatible-with-standard-logging
    """

    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str | None = None):
    """
    Configures loguru to output to stdout at `level` (LOG_LEVEL from the
    environment if omitted) and captures the transport libraries' stdlib
    logging.
    """
    if level is None:
        from .config import Settings

        level = Settings().LOG_LEVEL

    logger.remove()

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level.upper(),
        colorize=True,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # httpx logs every request at INFO; keep it under the same sink
    for name in ["httpx", "httpcore"]:
        _logger = logging.getLogger(name)
        _logger.handlers = [InterceptHandler()]
        _logger.propagate = False

    logger.debug(f"Logging initialized at {level.upper()}")
