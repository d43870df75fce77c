"""Logging setup: coloured screen output and an optional log file.

`init_logger` builds the handlers; every logger returned by `get_logger`
shares them, including loggers created before the last `init_logger` call.
"""

import logging

from .ansi import LogStyles, make_style, should_colorize
from .debug import is_debug, set_debug

__all__ = [
    "LogObjects",
    "ScreenLogFormatter",
    "get_logger",
    "init_logger",
]

FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"
DEBUG_FORMAT = r"%(name)25s - %(message)s // %(filename)s:%(lineno)d"
SCREEN_FORMAT = r"%(message)s"


class LogObjects:
    """Handlers shared by the sworncmd loggers, and the loggers using them."""

    handlers: list[logging.Handler] = []
    loggers: list[logging.Logger] = []


class ScreenLogFormatter(logging.Formatter):
    """Terminal formatter highlighting warnings and errors.

    Args:
        colors: Force colours on or off; detected from stderr when None
    """

    STYLES = {
        logging.WARNING: LogStyles.WARNING,
        logging.ERROR: LogStyles.ERROR,
        logging.CRITICAL: LogStyles.CRITICAL,
    }

    def __init__(self, colors: bool | None = None) -> None:
        super().__init__()
        fmt = DEBUG_FORMAT if is_debug() else SCREEN_FORMAT
        if colors is None:
            colors = should_colorize()
        self._plain = logging.Formatter(fmt)
        self._styled: dict[int, logging.Formatter] = {}
        if colors:
            for level, codes in self.STYLES.items():
                start, end = make_style(*codes)
                self._styled[level] = logging.Formatter(start + fmt + end)

    def format(self, record: logging.LogRecord) -> str:
        return self._styled.get(record.levelno, self._plain).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Build the shared handlers.

    Loggers already returned by `get_logger` switch to the new handlers; the
    previous ones are closed.

    Args:
        filename: Also write every record to this file
        force_debug: Turn debug mode on
    """
    if force_debug:
        set_debug(True)

    handlers: list[logging.Handler] = []
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)
    screen_handler = logging.StreamHandler()
    screen_handler.setFormatter(ScreenLogFormatter())
    handlers.append(screen_handler)
    previous = list(LogObjects.handlers)
    LogObjects.handlers[:] = handlers
    for logger in LogObjects.loggers:
        for handler in previous:
            logger.removeHandler(handler)
        _attach_handlers(logger)
    for handler in previous:
        handler.close()


def _attach_handlers(logger: logging.Logger) -> None:
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)


def get_logger(name: str = "sworncmd", level: int | None = None) -> logging.Logger:
    """Return the logger `name`, attached to the shared handlers.

    Args:
        name: Logger name
        level: Explicit level; DEBUG in debug mode and WARNING otherwise when unset

    Returns:
        The logger
    """
    logger = logging.getLogger(name)
    if level is None:
        level = logging.DEBUG if is_debug() else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    _attach_handlers(logger)
    if logger not in LogObjects.loggers:
        LogObjects.loggers.append(logger)
    logger.debug('Logger "%s" initialized', name)
    return logger
