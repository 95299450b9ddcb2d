"""
Custom logging formatter that prefixes every record with a UTC timestamp.
"""

import datetime
import logging


class UTCTimestampFormatter(logging.Formatter):
    """
    Formatter that prepends "[YYYY-MM-DD HH:MM:SS.mmm UTC]" to the message
    produced by the standard formatter.
    """

    def format(self, record):
        utc_now = datetime.datetime.now(datetime.timezone.utc)
        timestamp = utc_now.strftime("%Y-%m-%d %H:%M:%S")
        milliseconds = f"{utc_now.microsecond // 1000:03d}"
        formatted = super().format(record)
        return f"[{timestamp}.{milliseconds} UTC] {formatted}"
