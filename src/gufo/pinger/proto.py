# ---------------------------------------------------------------------
# Gufo Pinger: Protocols
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""Protocols for the pluggable probe and lookup capabilities."""

# Python modules
from typing import Protocol, Sequence

# Gufo Labs modules
from .outcome import Outcome


class ProbeProto(Protocol):
    """
    Blocking probe protocol.

    Implemented by `gufo.pinger.ping.Ping`. Tests replace it
    with stubs.
    """

    def send(self: "ProbeProto", addr: str) -> Outcome:
        """
        Perform one blocking ICMP echo.

        Must not raise on probe-level failures. Report them
        as `Failure` instead.

        Args:
            addr: IPv4/IPv6 address to ping.

        Returns:
            Probe outcome.
        """
        ...


class LookupProto(Protocol):
    """DNS lookup protocol."""

    def __call__(self: "LookupProto", name: str) -> Sequence[str]:
        """
        Resolve host name.

        Args:
            name: Host name.

        Returns:
            Ordered list of addresses. May be empty.

        Raises:
            OSError: on resolver failure.
        """
        ...
