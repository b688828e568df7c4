"""Log kinds carried by CreateLogEvent."""

from enum import Enum


class LogType(str, Enum):
    """Severity of a log event.

    The lower-cased value names the logger method the log listener
    dispatches to (``ERROR`` -> ``logger.error``). ``INFO`` is accepted as
    an alias channel of ``LOG``.
    """

    LOG = "LOG"
    INFO = "INFO"
    ERROR = "ERROR"
    WARNING = "WARNING"
    DEBUG = "DEBUG"
    CRITICAL = "CRITICAL"
