# ---------------------------------------------------------------------
# Gufo Pinger: Test Utilities
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

# Python modules
import logging
import socket
import threading
import time
from functools import cached_property
from typing import Any, Dict, Iterable, List, Optional

# Gufo Labs modules
from gufo.pinger.outcome import Outcome, Success


class Caps(object):
    @cached_property
    def has_ipv4(self: "Caps") -> bool:
        """
        Check system allows IPv4 raw sockets.

        Returns:
            * True - if IPv4 raw sockets are allowed.
            * False - if IPv4 raw sockets are denied.
        """
        try:
            s = socket.socket(
                socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP
            )
            s.bind(("127.0.0.1", 0))
            s.close()
            return True
        except OSError:
            return False

    @cached_property
    def has_ipv6(self: "Caps") -> bool:
        """
        Check system allows IPv6 raw sockets.

        Returns:
            * True - if IPv6 raw sockets are allowed.
            * False - if IPv6 raw sockets are denied.
        """
        try:
            s = socket.socket(
                socket.AF_INET6, socket.SOCK_RAW, socket.IPPROTO_ICMPV6
            )
            s.bind(("::1", 0))
            s.close()
            return True
        except OSError:
            return False

    @cached_property
    def has_dgram(self: "Caps") -> bool:
        """Check system allows unprivileged IPv4 ICMP sockets."""
        try:
            s = socket.socket(
                socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_ICMP
            )
            s.close()
            return True
        except OSError:
            return False

    @cached_property
    def is_denied(self: "Caps") -> bool:
        """Check if all raw sockets are denied."""
        return not (self.has_ipv4 or self.has_ipv6)

    @cached_property
    def loopbacks(self: "Caps") -> List[str]:
        """
        Get list of loopback addresses.

        Returns:
            List of IPv4/IPv6 loopbback addresses for all
            allowed protocols. Empty if raw sockets are
            denied.
        """
        r: List[str] = []
        if self.has_ipv4:
            r.append("127.0.0.1")
        if self.has_ipv6:
            r.append("::1")
        return r


class StubProbe(object):
    """
    Probe returning prepared outcomes.

    Outcomes are repeated cyclically. Records dispatch
    start and end times along with the running thread names.

    Args:
        outcomes: Outcomes to return.
        delay: Simulated probe duration, in seconds.
    """

    def __init__(
        self: "StubProbe",
        outcomes: Optional[Iterable[Outcome]] = None,
        delay: float = 0.0,
    ) -> None:
        self.outcomes: List[Outcome] = list(outcomes or [Success(0.001)])
        self.delay = delay
        self.calls: List[str] = []
        self.starts: List[float] = []
        self.ends: List[float] = []
        self.threads: List[str] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def send(self: "StubProbe", addr: str) -> Outcome:
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            n = len(self.calls)
            self.calls.append(addr)
            self.starts.append(time.monotonic())
            self.threads.append(threading.current_thread().name)
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self.active -= 1
            self.ends.append(time.monotonic())
        return self.outcomes[n % len(self.outcomes)]


class CrashingProbe(object):
    """Probe raising unexpected exception."""

    def __init__(
        self: "CrashingProbe", error: Optional[BaseException] = None
    ) -> None:
        self.error = error or RuntimeError("boom")

    def send(self: "CrashingProbe", addr: str) -> Outcome:
        raise self.error


def get_logger(name: str) -> logging.Logger:
    """Get propagating test logger."""
    logger = logging.getLogger(f"tests.{name}")
    logger.setLevel(logging.DEBUG)
    return logger


def messages(records: Iterable[logging.LogRecord], name: str) -> List[str]:
    """Get messages emitted by the test logger."""
    return [r.getMessage() for r in records if r.name == f"tests.{name}"]


def as_str(v: Dict[str, Any]) -> str:
    """
    Format parameters for @parametrize(..., ids).

    Args:
        v: Input parameters.

    Returns:
        String to display as test id.

    Example:
        ``` py
        @pytest.mark.parametrize(...., ids=as_str)
        ```
    """
    return str(v)


caps = Caps()
