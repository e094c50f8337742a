# ---------------------------------------------------------------------
# Gufo Pinger: Shutdown coordinator
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""Race the main loop against termination signals."""

# Python modules
import asyncio
import logging
import signal
from typing import Any, Coroutine, Optional, Tuple

# Gufo Labs modules
from .error import SignalSetupError

SIGNALS: Tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class ShutdownCoordinator(object):
    """
    Stop the main loop on SIGINT/SIGTERM.

    Only the first signal counts, the rest are ignored.

    Args:
        logger: Logger to use. Use module's logger when empty.

    Example:
        ``` py
        async def main():
            sd = ShutdownCoordinator()
            sd.install()
            ok = await sd.race(scheduler.run())
        ```
    """

    def __init__(
        self: "ShutdownCoordinator", logger: Optional[logging.Logger] = None
    ) -> None:
        self.__logger = logger or logging.getLogger(__name__)
        self.__event: Optional[asyncio.Event] = None
        self.__signum: Optional[int] = None
        self.__installed: Tuple[signal.Signals, ...] = ()

    @property
    def signum(self: "ShutdownCoordinator") -> Optional[int]:
        """First received signal, if any."""
        return self.__signum

    def _get_event(self: "ShutdownCoordinator") -> asyncio.Event:
        if self.__event is None:
            self.__event = asyncio.Event()
        return self.__event

    def install(
        self: "ShutdownCoordinator",
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """
        Install signal handlers.

        Args:
            loop: Event loop. Use running loop when empty.

        Raises:
            SignalSetupError: when handlers cannot be installed.
        """
        loop = loop or asyncio.get_running_loop()
        self._get_event()
        for sig in SIGNALS:
            try:
                loop.add_signal_handler(sig, self.trigger, sig)
            except (
                NotImplementedError,
                ValueError,
                RuntimeError,
                OSError,
            ) as e:
                self.remove(loop)
                msg = f"Cannot install {sig.name} handler: {e}"
                raise SignalSetupError(msg) from e
            self.__installed += (sig,)

    def remove(
        self: "ShutdownCoordinator",
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """
        Remove installed signal handlers.

        Args:
            loop: Event loop. Use running loop when empty.
        """
        if not self.__installed:
            return
        loop = loop or asyncio.get_running_loop()
        for sig in self.__installed:
            loop.remove_signal_handler(sig)
        self.__installed = ()

    def trigger(self: "ShutdownCoordinator", signum: int) -> None:
        """
        Request shutdown.

        Called from the signal handler. Repeated calls
        have no effect.

        Args:
            signum: Received signal.
        """
        if self.__signum is not None:
            return
        self.__signum = signum
        self._get_event().set()

    async def wait(self: "ShutdownCoordinator") -> None:
        """Wait for the shutdown request."""
        await self._get_event().wait()

    async def race(
        self: "ShutdownCoordinator", main: Coroutine[Any, Any, None]
    ) -> bool:
        """
        Run `main` until it finishes or the shutdown is requested.

        When the shutdown wins, `main` is cancelled at its current
        suspension point. Threads started by `main` are not joined.

        Args:
            main: Main loop coroutine.

        Returns:
            * True - on shutdown request or when `main` finished.
            * False - when `main` failed.
        """
        main_task = asyncio.ensure_future(main)
        signal_task = asyncio.ensure_future(self.wait())
        done, _ = await asyncio.wait(
            {main_task, signal_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if signal_task in done:
            main_task.cancel()
            await asyncio.gather(main_task, return_exceptions=True)
            self.__logger.info("Shutting down")
            return True
        signal_task.cancel()
        await asyncio.gather(signal_task, return_exceptions=True)
        err = main_task.exception()
        if err is not None:
            self.__logger.error("Error: %s", err)
            return False
        self.__logger.info("Shutting down")
        return True
