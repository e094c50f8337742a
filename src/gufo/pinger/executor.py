# ---------------------------------------------------------------------
# Gufo Pinger: Off-thread probe executor
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""
Off-thread probe execution.

The probe blocks, so each dispatch runs in a separate
daemon thread and reports back to the event loop
via the future. The executor never joins the threads:
a probe still running on shutdown is abandoned.
"""

# Python modules
import logging
import threading
from asyncio import AbstractEventLoop, Future, get_running_loop
from typing import Union

# Gufo Labs modules
from .error import DispatchError
from .outcome import Outcome
from .proto import ProbeProto
from .resolver import Target

logger = logging.getLogger(__name__)


def _deliver(fut: "Future[Outcome]", r: Union[Outcome, BaseException]) -> None:
    """Pass probe result to the future, if still awaited."""
    if fut.done():
        return  # Cancelled
    if isinstance(r, BaseException):
        fut.set_exception(r)
    else:
        fut.set_result(r)


class ProbeExecutor(object):
    """
    Run blocking probe outside of the event loop.

    Args:
        probe: Blocking probe, like `gufo.pinger.ping.Ping`.
        name: Worker threads' name prefix.
    """

    def __init__(
        self: "ProbeExecutor", probe: ProbeProto, name: str = "probe"
    ) -> None:
        self.__probe = probe
        self.__name = name
        self.__n = 0

    def _worker(
        self: "ProbeExecutor",
        loop: AbstractEventLoop,
        fut: "Future[Outcome]",
        addr: str,
    ) -> None:
        """Thread body."""
        r: Union[Outcome, BaseException]
        try:
            r = self.__probe.send(addr)
        except BaseException as e:
            err = DispatchError(f"Probe crashed: {e!r}")
            err.__cause__ = e
            r = err
        try:
            loop.call_soon_threadsafe(_deliver, fut, r)
        except RuntimeError:
            # Loop is already closed, result is abandoned
            logger.debug("Dropping result of abandoned probe to %s", addr)

    async def run(self: "ProbeExecutor", target: Target) -> Outcome:
        """
        Run the probe in the separate thread and await the outcome.

        Args:
            target: Address to ping.

        Returns:
            Probe outcome.

        Raises:
            DispatchError: when thread cannot be started,
                or the probe raised unexpected exception.
        """
        loop = get_running_loop()
        fut: Future[Outcome] = loop.create_future()
        self.__n += 1
        thread = threading.Thread(
            target=self._worker,
            args=(loop, fut, str(target)),
            name=f"{self.__name}-{self.__n}",
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError as e:
            msg = f"Cannot start probe thread: {e}"
            raise DispatchError(msg) from e
        return await fut
