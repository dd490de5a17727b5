"""Loguru setup; stdlib loggers (uvicorn, sqlalchemy) are routed into loguru."""

import logging
import sys
from types import FrameType

from loguru import logger

__all__ = ["configure_logging", "InterceptHandler"]

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_CONFIGURED = False


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = "INFO", *, debug: bool = False) -> None:
    """Install the stderr sink once and silence noisy third-party loggers."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = "DEBUG" if debug else level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level_name, colorize=True, backtrace=False, diagnose=False, format=LOG_FORMAT)

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        target = logging.getLogger(name)
        target.handlers = []
        target.propagate = True

    # echo=True in debug already prints SQL; keep engine logs at WARNING otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if debug else logging.WARNING)

    _CONFIGURED = True
