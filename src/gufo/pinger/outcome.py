# ---------------------------------------------------------------------
# Gufo Pinger: Probe outcome
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""
Probe outcome types.

Each probe produces exactly one outcome, which is either
`Success` or `Failure`.

Attributes:
    Outcome: Union of `Success` and `Failure`.
"""

# Python modules
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class FailureReason(str, Enum):
    """
    Probe failure class.

    Attributes:
        TIMEOUT: No reply within timeout.
        UNREACHABLE: ICMP destination unreachable or time exceeded.
        PERMISSION: Not allowed to open ICMP socket.
        SOCKET: Any other socket error.
    """

    TIMEOUT = "timeout"
    UNREACHABLE = "host unreachable"
    PERMISSION = "permission denied"
    SOCKET = "socket error"


@dataclass(frozen=True)
class Success(object):
    """
    Echo reply received.

    Args:
        rtt: Round-trip time, in seconds.
    """

    rtt: float


@dataclass(frozen=True)
class Failure(object):
    """
    Probe failed.

    Args:
        reason: Failure class.
        detail: Optional details.
    """

    reason: FailureReason
    detail: Optional[str] = None

    @property
    def error(self: "Failure") -> str:
        """Error text for logging."""
        if self.detail:
            return f"{self.reason.value}: {self.detail}"
        return self.reason.value


Outcome = Union[Success, Failure]
