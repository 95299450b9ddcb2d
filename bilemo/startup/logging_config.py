"""
Logging configuration for the BileMo API.

Records go to the console and to bilemo.log, both through the UTC
timestamp formatter.
"""

import logging
import os
import sys

from bilemo.config import config
from bilemo.utils.logging_formatter import UTCTimestampFormatter
from bilemo.utils.verbosity_logger import drop_fallback_handlers, get_logger

logger = get_logger("bilemo.startup.logging")


def get_logs_dir() -> str:
    """BILEMO_LOG_DIR when set (service installs), else ./logs."""
    return os.environ.get("BILEMO_LOG_DIR") or "logs"


def configure_logging():
    """Configure logging with UTC timestamp formatter and file/console handlers."""
    logs_dir = get_logs_dir()
    os.makedirs(logs_dir, exist_ok=True)

    handlers = [logging.StreamHandler()]
    log_file = config.get_log_file() or os.path.join(logs_dir, "bilemo.log")
    try:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    except PermissionError as e:
        print(
            f"WARNING: Cannot write to {log_file} ({e}). Logging to console only.",
            file=sys.stderr,
        )

    logging.basicConfig(level=logging.INFO, handlers=handlers)

    utc_formatter = UTCTimestampFormatter(config.get_log_format())
    for handler in logging.root.handlers:
        handler.setFormatter(utc_formatter)
    drop_fallback_handlers()
    logger.info("Logging configured, file: %s", log_file)
