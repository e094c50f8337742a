# ---------------------------------------------------------------------
# Gufo Pinger: Network reachability probe
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""
Gufo Pinger is the long-running asyncio ICMP reachability probe.

Attributes:
    __version__: Current version.
"""

# Gufo Labs modules
from .error import (
    DispatchError,
    PingerError,
    ProbeFailure,
    ResolutionError,
    SignalSetupError,
)
from .executor import ProbeExecutor
from .outcome import Failure, FailureReason, Outcome, Success
from .ping import Ping
from .resolver import Resolver, Target
from .scheduler import Scheduler
from .shutdown import ShutdownCoordinator

__version__: str = "0.1.0"
__all__ = [
    "DispatchError",
    "Failure",
    "FailureReason",
    "Outcome",
    "Ping",
    "PingerError",
    "ProbeExecutor",
    "ProbeFailure",
    "ResolutionError",
    "Resolver",
    "Scheduler",
    "ShutdownCoordinator",
    "SignalSetupError",
    "Success",
    "Target",
    "__version__",
]
