# ---------------------------------------------------------------------
# Gufo Pinger: Errors
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""Gufo Pinger exceptions."""

# Python modules
from typing import Optional

# Gufo Labs modules
from .outcome import FailureReason


class PingerError(Exception):
    """Base class for Gufo Pinger errors."""


class ResolutionError(PingerError):
    """Target address cannot be resolved."""


class DispatchError(PingerError):
    """Off-thread probe execution failed."""


class SignalSetupError(PingerError):
    """Cannot install termination signal handlers."""


class ProbeFailure(PingerError):
    """
    Single ICMP echo probe failed.

    Args:
        reason: Failure class.
        detail: Optional human-readable detail.
    """

    def __init__(
        self: "ProbeFailure",
        reason: FailureReason,
        detail: Optional[str] = None,
    ) -> None:
        msg = f"{reason.value}: {detail}" if detail else reason.value
        super().__init__(msg)
        self.reason = reason
        self.detail = detail
