"""
Flexible logging utility for BileMo.

Log levels are configured as a pipe-separated list (for example
"INFO|WARNING|ERROR|CRITICAL"); only the listed levels are emitted, which
lets an operator enable DEBUG output for cache activity without also
turning on everything between DEBUG and ERROR.
"""

import logging
import re
from typing import Dict, Set

from bilemo.config.config import get_log_format, get_log_levels
from bilemo.utils.logging_formatter import UTCTimestampFormatter

# Matches control characters that can cause log injection (CWE-117)
_CONTROL_CHAR_RE = re.compile(r"[\r\n]")

DEFAULT_LEVELS = {logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL}

_LOGGERS: Dict[str, "FlexibleLogger"] = {}


def sanitize_log(value) -> str:
    """Strip newlines from user-supplied values before they reach a log line."""
    return _CONTROL_CHAR_RE.sub("", str(value))


def parse_levels(level_config: str) -> Set[int]:
    """
    Turn "INFO|ERROR" into {logging.INFO, logging.ERROR}.

    Unknown names are ignored; an empty result falls back to DEFAULT_LEVELS.
    """
    enabled_levels = set()
    for level_name in str(level_config).split("|"):
        level = logging.getLevelName(level_name.strip().upper())
        if isinstance(level, int):
            enabled_levels.add(level)
    return enabled_levels or set(DEFAULT_LEVELS)


class FlexibleLogger:
    """
    Thin wrapper over a stdlib logger that filters on an explicit set of
    enabled levels instead of a threshold.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        try:
            self.enabled_levels = parse_levels(get_log_levels())
        except (KeyError, AttributeError, ValueError):
            self.enabled_levels = set(DEFAULT_LEVELS)

        # Filtering happens in _log
        self.logger.setLevel(logging.DEBUG)

        # Console output until configure_logging() installs the root handlers
        self.fallback_handler = None
        if not self.logger.handlers and not logging.root.handlers:
            self.fallback_handler = logging.StreamHandler()
            self.fallback_handler.setFormatter(UTCTimestampFormatter(get_log_format()))
            self.logger.addHandler(self.fallback_handler)

    def drop_fallback_handler(self):
        """Leave output to the root handlers."""
        if self.fallback_handler is not None:
            self.logger.removeHandler(self.fallback_handler)
            self.fallback_handler = None

    def is_enabled(self, level: int) -> bool:
        """Check if messages at the given level are emitted."""
        return level in self.enabled_levels

    def _log(self, level: int, msg: str, *args, **kwargs):
        if self.is_enabled(level):
            self.logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        """Log an error together with the active traceback."""
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs):
        self._log(logging.CRITICAL, msg, *args, **kwargs)


def get_logger(name: str) -> FlexibleLogger:
    """Get (or create) the flexible logger registered under name."""
    if name not in _LOGGERS:
        _LOGGERS[name] = FlexibleLogger(name)
    return _LOGGERS[name]


def drop_fallback_handlers():
    """
    Remove the console handlers of every logger created so far.  Called once
    the root handlers are installed so each record is written once.
    """
    for flexible_logger in _LOGGERS.values():
        flexible_logger.drop_fallback_handler()
