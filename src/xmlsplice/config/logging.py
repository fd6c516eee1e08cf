# topmark:header:start
#
#   project      : xmlsplice
#   file         : logging.py
#   file_relpath : src/xmlsplice/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging for the patch pipeline.

Every xmlsplice module holds a module-level logger from `get_logger`. Block positions
and cleanup counts are logged at DEBUG; the text of each marshalled and re-indented
block is logged at ``TRACE``, a level below DEBUG registered here as ``logging.TRACE``.

Importing xmlsplice installs no handler. `setup_logging` attaches a single stderr
handler whose `ChalkFormatter` colours each record by severity.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")
if not hasattr(logging, "TRACE"):
    logging.TRACE = TRACE_LEVEL  # type: ignore[attr-defined]


class XmlspliceLogger(logging.Logger):
    """Logger with a `trace` method for block-level pipeline output."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at ``TRACE_LEVEL``.

        Args:
            msg (object): The message, a ``%``-style format string.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Extra attributes for the log record.
        """
        if not self.isEnabledFor(TRACE_LEVEL):
            return
        # stacklevel=2 attributes the record to the caller, not to this method.
        self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = (
    "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"
)

# Highest threshold first; a record takes the style of the first threshold it reaches.
LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Colour each formatted record by the first `LEVEL_STYLES` threshold it reaches.

    Records below ``TRACE`` are dimmed.
    """

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        for threshold, style in LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(message)
        return chalk.dim(message)


def setup_logging(level: int = logging.WARNING) -> None:
    """Send xmlsplice records (and all others) to stderr, coloured by severity.

    Any handler already on the root logger is replaced, so repeated calls never
    duplicate output. Below INFO the format adds file, line and function.

    Args:
        level (int): Root logger level; `TRACE_LEVEL` shows every block the patch
            pipeline produces.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(DEBUG_LOG_FORMAT if level < logging.INFO else LOG_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> XmlspliceLogger:
    """Return the `XmlspliceLogger` called ``name``.

    `XmlspliceLogger` is the logger class only while the logger is created; the host
    application's logger class is restored right after.

    Args:
        name (str): Logger name, normally the calling module's ``__name__``.

    Returns:
        XmlspliceLogger: The logger.
    """
    existing = logging.Logger.manager.loggerDict.get(name)
    if isinstance(existing, XmlspliceLogger):
        return existing
    previous = logging.getLoggerClass()
    logging.setLoggerClass(XmlspliceLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous)
    return cast("XmlspliceLogger", logger)
