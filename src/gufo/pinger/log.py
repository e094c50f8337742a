# ---------------------------------------------------------------------
# Gufo Pinger: Logging setup
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""
Logging configuration and time-based file rotation.

Attributes:
    LOGGER_NAME: Package's root logger.
    LOG_FORMAT: Log record format.
"""

# Python modules
import datetime
import gzip
import logging
import os
import shutil
import sys
import time
from enum import Enum
from logging.handlers import BaseRotatingHandler
from typing import List, Optional, Union

LOGGER_NAME = "gufo.pinger"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
GZ = ".gz"


class Frequency(str, Enum):
    """Log rotation cadence."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


def next_rollover(
    now: datetime.datetime, frequency: Frequency
) -> datetime.datetime:
    """
    Get start of the next period.

    Args:
        now: Current time.
        frequency: Rotation cadence.

    Returns:
        Start of the next hour, day, week (Monday),
        month or year.
    """
    if frequency == Frequency.HOURLY:
        start = now.replace(minute=0, second=0, microsecond=0)
        return start + datetime.timedelta(hours=1)
    day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if frequency == Frequency.DAILY:
        return day + datetime.timedelta(days=1)
    if frequency == Frequency.WEEKLY:
        return day + datetime.timedelta(days=7 - day.weekday())
    if frequency == Frequency.MONTHLY:
        if day.month == 12:
            return day.replace(year=day.year + 1, month=1, day=1)
        return day.replace(month=day.month + 1, day=1)
    return day.replace(year=day.year + 1, month=1, day=1)


class TimeRotatingFileHandler(BaseRotatingHandler):
    """
    Rotate log file at the start of each calendar period.

    Rotated files are named `<filename>.1`, `<filename>.2`, ...,
    the most recent first. With compression enabled, rotated
    files get the `.gz` suffix.

    Args:
        filename: Log file path.
        frequency: Rotation cadence.
        backup_count: Number of rotated files to keep.
        compress: Compress rotated files with gzip.
        encoding: File encoding.
        delay: Open file on first record.
    """

    def __init__(
        self: "TimeRotatingFileHandler",
        filename: Union[str, "os.PathLike[str]"],
        frequency: Frequency = Frequency.HOURLY,
        backup_count: int = 3,
        compress: bool = True,
        encoding: Optional[str] = "utf-8",
        delay: bool = False,
    ) -> None:
        super().__init__(filename, "a", encoding=encoding, delay=delay)
        self.frequency = Frequency(frequency)
        self.backup_count = backup_count
        self.compress = compress
        self.rollover_at = self.compute_rollover(time.time())

    def compute_rollover(self: "TimeRotatingFileHandler", t: float) -> float:
        """Get timestamp of the next rollover."""
        now = datetime.datetime.fromtimestamp(t)
        return next_rollover(now, self.frequency).timestamp()

    def shouldRollover(  # noqa: N802
        self: "TimeRotatingFileHandler", record: logging.LogRecord
    ) -> bool:
        """Check rollover time is reached."""
        return time.time() >= self.rollover_at

    def _backup_name(self: "TimeRotatingFileHandler", n: int) -> str:
        name = f"{self.baseFilename}.{n}"
        if self.compress:
            name += GZ
        return name

    def doRollover(self: "TimeRotatingFileHandler") -> None:  # noqa: N802
        """Shift backups and start the new file."""
        if self.stream:
            self.stream.close()
            self.stream = None  # type: ignore[assignment]
        if self.backup_count > 0:
            oldest = self._backup_name(self.backup_count)
            if os.path.exists(oldest):
                os.remove(oldest)
            for n in range(self.backup_count - 1, 0, -1):
                src = self._backup_name(n)
                if os.path.exists(src):
                    os.replace(src, self._backup_name(n + 1))
            if os.path.exists(self.baseFilename):
                if self.compress:
                    with open(self.baseFilename, "rb") as f_in, gzip.open(
                        self._backup_name(1), "wb"
                    ) as f_out:
                        shutil.copyfileobj(f_in, f_out)
                    os.remove(self.baseFilename)
                else:
                    os.replace(self.baseFilename, self._backup_name(1))
        elif os.path.exists(self.baseFilename):
            os.remove(self.baseFilename)
        if not self.delay:
            self.stream = self._open()
        self.rollover_at = self.compute_rollover(time.time())


def setup_logging(
    level: Union[int, str] = logging.INFO,
    path: Optional[str] = "pinger.log",
    frequency: Frequency = Frequency.HOURLY,
    backup_count: int = 3,
    compress: bool = True,
) -> logging.Logger:
    """
    Configure package logging.

    Sends records to stderr and, when `path` is set,
    to the rotating log file. Previously installed
    handlers are replaced.

    Args:
        level: Logging level.
        path: Log file path. Disable file logging when empty.
        frequency: Rotation cadence.
        backup_count: Number of rotated files to keep.
        compress: Compress rotated files.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    formatter = logging.Formatter(LOG_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if path:
        handlers.append(
            TimeRotatingFileHandler(
                path,
                frequency=frequency,
                backup_count=backup_count,
                compress=compress,
            )
        )
    for h in handlers:
        h.setFormatter(formatter)
        logger.addHandler(h)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
