# ---------------------------------------------------------------------
# Gufo Pinger: Test logging
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

# Python modules
import datetime
import gzip
import logging
import os
from pathlib import Path
from typing import Iterator

# Third-party modules
import pytest

# Gufo Labs modules
from gufo.pinger.log import (
    LOGGER_NAME,
    Frequency,
    TimeRotatingFileHandler,
    next_rollover,
    setup_logging,
)

NOW = datetime.datetime(2026, 12, 31, 23, 15, 42, 123)


@pytest.mark.parametrize(
    ("now", "frequency", "expected"),
    [
        (NOW, Frequency.HOURLY, datetime.datetime(2027, 1, 1, 0, 0)),
        (
            datetime.datetime(2026, 3, 4, 10, 0),
            Frequency.HOURLY,
            datetime.datetime(2026, 3, 4, 11, 0),
        ),
        (NOW, Frequency.DAILY, datetime.datetime(2027, 1, 1)),
        (
            datetime.datetime(2026, 2, 28, 12, 0),
            Frequency.DAILY,
            datetime.datetime(2026, 3, 1),
        ),
        # 2026-10-18 is Sunday
        (
            datetime.datetime(2026, 10, 18, 8, 0),
            Frequency.WEEKLY,
            datetime.datetime(2026, 10, 19),
        ),
        # 2026-10-19 is Monday
        (
            datetime.datetime(2026, 10, 19, 0, 0),
            Frequency.WEEKLY,
            datetime.datetime(2026, 10, 26),
        ),
        (
            datetime.datetime(2026, 1, 31, 12, 0),
            Frequency.MONTHLY,
            datetime.datetime(2026, 2, 1),
        ),
        (NOW, Frequency.MONTHLY, datetime.datetime(2027, 1, 1)),
        (
            datetime.datetime(2026, 6, 15),
            Frequency.YEARLY,
            datetime.datetime(2027, 1, 1),
        ),
    ],
)
def test_next_rollover(
    now: datetime.datetime,
    frequency: Frequency,
    expected: datetime.datetime,
) -> None:
    assert next_rollover(now, frequency) == expected


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, (), None)


def _rotate(h: TimeRotatingFileHandler, msg: str) -> None:
    h.rollover_at = 0.0
    h.emit(_record(msg))


def _read(path: Path) -> str:
    if path.suffix == ".gz":
        with gzip.open(path, "rt") as f:
            return f.read()
    return path.read_text()


@pytest.fixture()
def log_path(tmp_path: Path) -> Iterator[Path]:
    yield tmp_path / "pinger.log"


def test_no_rollover(log_path: Path) -> None:
    h = TimeRotatingFileHandler(log_path)
    h.emit(_record("first"))
    h.emit(_record("second"))
    h.close()
    assert _read(log_path) == "first\nsecond\n"
    assert os.listdir(log_path.parent) == ["pinger.log"]


def test_rollover_compress(log_path: Path) -> None:
    h = TimeRotatingFileHandler(log_path, backup_count=3)
    for n in range(5):
        _rotate(h, f"msg{n}")
    h.close()
    assert sorted(os.listdir(log_path.parent)) == [
        "pinger.log",
        "pinger.log.1.gz",
        "pinger.log.2.gz",
        "pinger.log.3.gz",
    ]
    assert _read(log_path) == "msg4\n"
    assert _read(log_path.with_name("pinger.log.1.gz")) == "msg3\n"
    assert _read(log_path.with_name("pinger.log.3.gz")) == "msg1\n"
    assert h.rollover_at > 0


def test_rollover_plain(log_path: Path) -> None:
    h = TimeRotatingFileHandler(log_path, backup_count=2, compress=False)
    for n in range(3):
        _rotate(h, f"msg{n}")
    h.close()
    assert sorted(os.listdir(log_path.parent)) == [
        "pinger.log",
        "pinger.log.1",
        "pinger.log.2",
    ]
    assert _read(log_path.with_name("pinger.log.1")) == "msg1\n"


def test_rollover_no_backups(log_path: Path) -> None:
    h = TimeRotatingFileHandler(log_path, backup_count=0)
    _rotate(h, "msg0")
    _rotate(h, "msg1")
    h.close()
    assert os.listdir(log_path.parent) == ["pinger.log"]
    assert _read(log_path) == "msg1\n"


def test_setup_logging(log_path: Path) -> None:
    logger = setup_logging(level="debug", path=str(log_path))
    try:
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        logging.getLogger(f"{LOGGER_NAME}.test").info("Sent ping to ::1")
        for h in logger.handlers:
            h.flush()
        assert "INFO gufo.pinger.test: Sent ping to ::1" in _read(log_path)
        # Repeated setup replaces handlers
        logger = setup_logging(path=None)
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
    finally:
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
