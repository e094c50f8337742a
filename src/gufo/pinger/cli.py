# ---------------------------------------------------------------------
# Gufo Pinger: Command-line utility
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# See LICENSE.md for details
# ---------------------------------------------------------------------
"""
`gufo-pinger` command line utility.

Attributes:
    NAME: Utility's name.
    ENV_LOG_LEVEL: Environment variable to set default log level.
"""

# Python modules
import argparse
import asyncio
import os
import re
import sys
from enum import IntEnum
from typing import List, NoReturn, Optional

# Gufo Labs modules
from .error import ResolutionError, SignalSetupError
from .executor import ProbeExecutor
from .log import Frequency, setup_logging
from .ping import MIN_SIZE, Ping
from .resolver import Resolver
from .scheduler import Scheduler
from .shutdown import ShutdownCoordinator

NAME = "gufo-pinger"
ENV_LOG_LEVEL = "GUFO_PINGER_LOG"
DEFAULT_LOG = "pinger.log"

UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "sec": 1.0,
    "m": 60.0,
    "min": 60.0,
    "h": 3600.0,
    "hr": 3600.0,
    "d": 86400.0,
}
rx_duration_part = re.compile(r"\s*(\d+(?:\.\d*)?|\.\d+)\s*([a-z]*)")


class ExitCode(IntEnum):
    """
    Cli exit codes.

    Attributes:
        OK: Successful exit
        ERR: Error
    """

    OK = 0
    ERR = 1


def parse_duration(s: str) -> float:
    """
    Parse human-readable duration.

    Args:
        s: Duration like `5s`, `100ms`, `1m30s` or `1.5`.
            Numbers without unit are seconds.

    Returns:
        Duration in seconds.

    Raises:
        argparse.ArgumentTypeError: on invalid duration.
    """
    v = s.strip().lower()
    pos = 0
    total = 0.0
    while pos < len(v):
        match = rx_duration_part.match(v, pos)
        if not match:
            msg = f"invalid duration: {s}"
            raise argparse.ArgumentTypeError(msg)
        num, unit = match.groups()
        if unit not in UNITS and not (unit == "" and pos == 0):
            msg = f"invalid duration unit: {unit or '<none>'}"
            raise argparse.ArgumentTypeError(msg)
        total += float(num) * UNITS.get(unit, 1.0)
        pos = match.end()
        if not unit and pos < len(v):
            msg = f"invalid duration: {s}"
            raise argparse.ArgumentTypeError(msg)
    if pos == 0 or total <= 0:
        msg = f"duration must be positive: {s}"
        raise argparse.ArgumentTypeError(msg)
    return total


class Cli(object):
    """`gufo-pinger` utility class."""

    def die(self: "Cli", msg: Optional[str] = None) -> NoReturn:
        """Die with message."""
        if msg:
            print(msg, file=sys.stderr)
        sys.exit(1)

    def get_parser(self: "Cli") -> argparse.ArgumentParser:
        """Build command-line parser."""
        parser = argparse.ArgumentParser(
            prog=NAME,
            description="Pinger with logging to monitor network activity",
        )
        parser.add_argument("address", help="Address or host name to ping")
        parser.add_argument(
            "-i",
            "--interval",
            type=parse_duration,
            default="5s",
            help="Interval between pings (default: 5s)",
        )
        parser.add_argument(
            "-c",
            "--count",
            type=int,
            help="Stop after sending `count` packets",
        )
        parser.add_argument(
            "-s",
            "--size",
            type=int,
            default=MIN_SIZE,
            help="Packet size",
        )
        parser.add_argument(
            "-t",
            "--timeout",
            type=parse_duration,
            default="1s",
            help="Reply timeout (default: 1s)",
        )
        parser.add_argument("--ttl", type=int, help="Outgoing packets' TTL")
        parser.add_argument("--tos", type=int, help="Outgoing packets' ToS")
        parser.add_argument("--src-addr", help="Source address")
        parser.add_argument(
            "-u",
            "--unprivileged",
            action="store_true",
            help="Use unprivileged datagram ICMP sockets",
        )
        parser.add_argument(
            "--log-file",
            default=DEFAULT_LOG,
            help=f"Log file, `-` to disable (default: {DEFAULT_LOG})",
        )
        parser.add_argument(
            "--rotate",
            choices=[f.value for f in Frequency],
            default=Frequency.HOURLY.value,
            help="Log rotation cadence",
        )
        parser.add_argument(
            "--keep",
            type=int,
            default=3,
            help="Number of rotated log files to keep",
        )
        parser.add_argument(
            "--no-compress",
            action="store_true",
            help="Do not compress rotated log files",
        )
        parser.add_argument(
            "--log-level",
            default=os.environ.get(ENV_LOG_LEVEL, "INFO"),
            help=f"Logging level (default: ${ENV_LOG_LEVEL} or INFO)",
        )
        return parser

    def run(self: "Cli", args: List[str]) -> ExitCode:
        """
        Parse command-line arguments and run pinger.

        Args:
            args: List of command-line arguments
        Returns:
            ExitCode
        """
        ns = self.get_parser().parse_args(args)
        if ns.count is not None and ns.count < 1:
            self.die("count must be positive")
        if ns.keep < 0:
            self.die("keep must not be negative")
        try:
            ping = Ping(
                size=ns.size,
                src_addr=ns.src_addr,
                ttl=ns.ttl,
                tos=ns.tos,
                timeout=ns.timeout,
                privileged=not ns.unprivileged,
            )
        except ValueError as e:
            self.die(str(e))
        try:
            logger = setup_logging(
                level=ns.log_level,
                path=None if ns.log_file == "-" else ns.log_file,
                frequency=Frequency(ns.rotate),
                backup_count=ns.keep,
                compress=not ns.no_compress,
            )
        except (ValueError, OSError) as e:
            self.die(f"Cannot setup logging: {e}")
        # Resolve target before starting the loop
        try:
            target = Resolver(logger=logger).resolve(ns.address)
        except ResolutionError as e:
            logger.error("Error: %s", e)
            return ExitCode.ERR
        scheduler = Scheduler(
            target, ProbeExecutor(ping), interval=ns.interval, logger=logger
        )
        # Setup loop
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        coordinator = ShutdownCoordinator(logger=logger)
        try:
            try:
                coordinator.install(loop)
            except SignalSetupError as e:
                logger.error("Error: %s", e)
                return ExitCode.ERR
            logger.debug(
                "Pinging %s every %.3fs", target, scheduler.interval
            )
            ok = loop.run_until_complete(
                coordinator.race(scheduler.run(count=ns.count))
            )
            return ExitCode.OK if ok else ExitCode.ERR
        finally:
            coordinator.remove(loop)
            loop.close()
            asyncio.set_event_loop(None)


def main(args: Optional[List[str]] = None) -> int:
    """Run `gufo-pinger` with command-line arguments."""
    return Cli().run(sys.argv[1:] if args is None else args).value
