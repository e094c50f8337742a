# ---------------------------------------------------------------------
# Gufo Pinger: Probe scheduler
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""Periodic probe scheduler."""

# Python modules
import asyncio
import logging
import math
from typing import Optional

# Gufo Labs modules
from .executor import ProbeExecutor
from .outcome import Failure, Outcome
from .resolver import Target


def next_tick(scheduled: float, now: float, interval: float) -> float:
    """
    Get time of the next dispatch.

    Ticks are placed at `scheduled + k * interval`.
    Ticks already in the past are skipped, so the
    overrunning probe delays the next dispatch to the
    next free slot but never causes a burst.

    Args:
        scheduled: Time of the previous tick.
        now: Current time.
        interval: Tick interval.

    Returns:
        Time of the first tick after `scheduled`,
        not earlier than `now`.
    """
    k = max(1, math.ceil((now - scheduled) / interval))
    return scheduled + k * interval


class Scheduler(object):
    """
    Send probes to the target at fixed cadence.

    Probes are strictly sequential: the next dispatch begins
    only after the previous outcome is logged.

    Args:
        target: Address to ping.
        executor: Off-thread probe executor.
        interval: Interval between probes, in seconds.
        logger: Logger to report outcomes. Use module's
            logger when empty.
    """

    def __init__(
        self: "Scheduler",
        target: Target,
        executor: ProbeExecutor,
        interval: float = 5.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if interval <= 0:
            msg = "interval must be positive"
            raise ValueError(msg)
        self.__target = target
        self.__executor = executor
        self.__interval = interval
        self.__logger = logger or logging.getLogger(__name__)

    @property
    def target(self: "Scheduler") -> Target:
        """Probed address."""
        return self.__target

    @property
    def interval(self: "Scheduler") -> float:
        """Interval between probes, in seconds."""
        return self.__interval

    def report(self: "Scheduler", outcome: Outcome) -> None:
        """
        Log probe outcome.

        Args:
            outcome: Probe outcome.
        """
        if isinstance(outcome, Failure):
            self.__logger.error(
                "Failed to ping %s, error: %s", self.__target, outcome.error
            )
        else:
            self.__logger.info("Sent ping to %s", self.__target)

    async def run(self: "Scheduler", count: Optional[int] = None) -> None:
        """
        Run probes until cancelled.

        Args:
            count: Stop after `count` probes, if set. Do not stop
                otherwise.

        Raises:
            DispatchError: when off-thread execution failed.
        """
        loop = asyncio.get_running_loop()
        tick = loop.time() + self.__interval
        n = 0
        while True:
            delay = tick - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            outcome = await self.__executor.run(self.__target)
            self.report(outcome)
            n += 1
            if count and n >= count:
                break
            tick = next_tick(tick, loop.time(), self.__interval)
