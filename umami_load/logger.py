"""Logging for **umami_load**.

All messages go through the ``"UmamiLoad"`` logger::

    from umami_load.logger import logger
    logger.info("Load test started")

Code running on behalf of one simulated visitor logs through
:func:`visitor_logger`, which tags every line with the visitor id.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Final, MutableMapping, Tuple, Union

_LOGGER_NAME: Final[str] = "UmamiLoad"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Locust keeps its own loggers; ours only adds a handler to them.
_LOCUST_LOGGERS: Final[Tuple[str, ...]] = ("locust.runners", "locust.stats_logger")

logger: logging.Logger = logging.getLogger(_LOGGER_NAME)


class VisitorLogAdapter(logging.LoggerAdapter):
    """Prefixes each message with ``[visitor N]``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[visitor {self.extra['visitor_id']}] {msg}", kwargs


def visitor_logger(visitor_id: int) -> VisitorLogAdapter:
    return VisitorLogAdapter(logger, {"visitor_id": visitor_id})


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Send project and Locust runner logs to stdout and, optionally, a rotating file.

    Calling it again replaces the handlers installed by the previous call.
    """
    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)

    for name in (_LOGGER_NAME, *_LOCUST_LOGGERS):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.handlers[:] = handlers
        lg.propagate = False
    return logger


__all__ = ["logger", "init_logging", "visitor_logger", "VisitorLogAdapter", "DEFAULT_FORMAT"]
