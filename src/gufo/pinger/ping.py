# ---------------------------------------------------------------------
# Gufo Pinger: Ping implementation
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""
Blocking ping probe implementation.

Attributes:
    IPv4: IPv4 address family.
    IPv6: IPv6 address family.
    IP_HEADER_SIZE: IP header size for address family.
    ICMP_HEADER_SIZE: ICMP header size.
"""

# Python modules
import itertools
import random
from typing import Any, Dict, Iterable, Optional, Tuple, Union

# Third-party modules
from icmplib import (
    DestinationUnreachable,
    ICMPLibError,
    ICMPRequest,
    ICMPv4Socket,
    ICMPv6Socket,
    SocketPermissionError,
    TimeExceeded,
    TimeoutExceeded,
)

# Gufo Labs modules
from .error import ProbeFailure
from .outcome import Failure, FailureReason, Outcome, Success

IPv4 = 4
IPv6 = 6
MIN_SIZE = 64
MAX_TTL = 255
MAX_TOS = 255
IP_HEADER_SIZE = {IPv4: 20, IPv6: 40}
ICMP_HEADER_SIZE = 8


def check_settings(
    ttl: Optional[int] = None, tos: Optional[int] = None
) -> None:
    """
    Check outgoing packet settings.

    Args:
        ttl: Outgoing packet's TTL.
        tos: Outgoing packet's ToS.

    Raises:
        ValueError: on invalid settings.
    """
    if ttl is not None and (ttl < 1 or ttl > MAX_TTL):
        msg = f"ttl must be in 1..{MAX_TTL} range"
        raise ValueError(msg)
    if tos is not None and (tos < 0 or tos > MAX_TOS):
        msg = f"tos must be in 0..{MAX_TOS} range"
        raise ValueError(msg)


def failure_from_error(e: ICMPLibError) -> ProbeFailure:
    """
    Convert icmplib error to probe failure.

    Args:
        e: Raised error.

    Returns:
        ProbeFailure instance.
    """
    if isinstance(e, TimeoutExceeded):
        return ProbeFailure(FailureReason.TIMEOUT)
    if isinstance(e, (DestinationUnreachable, TimeExceeded)):
        return ProbeFailure(FailureReason.UNREACHABLE, str(e))
    if isinstance(e, SocketPermissionError):
        return ProbeFailure(FailureReason.PERMISSION, str(e))
    return ProbeFailure(FailureReason.SOCKET, str(e))


class Ping(object):
    """
    Blocking ICMPv4/ICMPv6 ping probe.

    Each `send()` call opens a new icmplib socket, sends
    a single echo request and waits for the result.
    The probe blocks the calling thread, so run it with
    `gufo.pinger.executor.ProbeExecutor` from asyncio code.

    Args:
        size: Set outgoing packet's size, including IP header.
        src_addr: Set source address for outgoing packets.
            Depends upon address family. May be one of:
            * None - detect source address automatically.
            * str - containing source address for one address family.
            * Iterable of strings, containing multiple addresses
                which to be distributed among the address families.
                First address for given address family will be used.
        ttl: Set outgoing packet's TTL (hop limit for IPv6).
            Use icmplib defaults when empty.
        tos: Set DSCP/TOS (traffic class for IPv6) field
            to outgoing packets. Use icmplib defaults when empty.
        timeout: Reply timeout in seconds.
        privileged: Use raw sockets when set. Use unprivileged
            datagram ICMP sockets otherwise.

    Note:
        Opening the Raw Socket may require super-user priveleges
        or additional permissions. Unprivileged sockets on Linux
        depend on the `net.ipv4.ping_group_range` sysctl.

    Example:
        ``` py
        from gufo.pinger.ping import Ping

        outcome = Ping().send("127.0.0.1")
        print(outcome)
        ```
    """

    request_id = itertools.count(random.randint(0, 0xFFFF))

    def __init__(
        self: "Ping",
        size: int = MIN_SIZE,
        src_addr: Union[None, str, Iterable[str]] = None,
        ttl: Optional[int] = None,
        tos: Optional[int] = None,
        timeout: float = 1.0,
        privileged: bool = True,
    ) -> None:
        if size < MIN_SIZE:
            msg = f"size must be at least {MIN_SIZE}"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        check_settings(ttl=ttl, tos=tos)
        self.__size = size
        self.__src_addr = self._get_src_addr(src_addr)
        self.__timeout = timeout
        self.__privileged = privileged
        self.__options: Dict[str, Any] = {}
        if ttl is not None:
            self.__options["ttl"] = ttl
        if tos is not None:
            self.__options["traffic_class"] = tos

    @staticmethod
    def _get_afi(address: str) -> int:
        """
        Get address family (AFI) for a given address.

        Args:
            address: Address to ping.

        Returns:
            * `4` for IPv4
            * `6` for IPv6
        """
        if ":" in address:
            return IPv6
        return IPv4

    @staticmethod
    def _get_src_addr(addr: Union[None, str, Iterable[str]]) -> Dict[int, str]:
        """
        Parse source addresses.

        Parse source addresses and distribute them around address families.

        Args:
            addr: One of:
                * None - detect source address automatically.
                * str - containing source address for one address family.
                * Iterable of strings, containing multiple addresses
                    which to be distributed among the address families.
                    First address for given address family will be used.

        Returns:
            Dict of `address family` -> `source address`.
        """
        if not addr:
            return {}
        if isinstance(addr, str):
            return {Ping._get_afi(addr): addr}
        r: Dict[int, str] = {}
        for a in addr:
            afi = Ping._get_afi(a)
            if afi not in r:
                r[afi] = a
        return r

    def __get_request_id(self: "Ping") -> Tuple[int, int]:
        """
        Get request id.

        Generate ICMP request id and sequence number.

        Returns:
            Tuple of (`request_id`, `sequence`)
        """
        request_id = next(self.request_id) & 0xFFFF
        seq = random.randint(0, 0xFFFF)
        return request_id, seq

    def __ping(self: "Ping", addr: str) -> float:
        """
        Send echo request and wait for the reply.

        Args:
            addr: IPv4/IPv6 address to ping.

        Returns:
            Round-trip time in seconds.

        Raises:
            ProbeFailure: on timeout, ICMP error or socket error.
        """
        afi = self._get_afi(addr)
        request_id, seq = self.__get_request_id()
        sock_cls = ICMPv6Socket if afi == IPv6 else ICMPv4Socket
        try:
            with sock_cls(
                self.__src_addr.get(afi), privileged=self.__privileged
            ) as sock:
                request = ICMPRequest(
                    destination=addr,
                    id=request_id,
                    sequence=seq,
                    payload_size=self.__size
                    - IP_HEADER_SIZE[afi]
                    - ICMP_HEADER_SIZE,
                    **self.__options,
                )
                sock.send(request)
                reply = sock.receive(request, self.__timeout)
                reply.raise_for_status()
        except ICMPLibError as e:
            raise failure_from_error(e) from e
        return reply.time - request.time

    def send(self: "Ping", addr: str) -> Outcome:
        """
        Do ping probe.

        Send ICMP echo request to the given address and wait
        for response or timeout. Blocks the calling thread.

        Args:
            addr: IPv4/IPv6 address to ping.

        Returns:
            * `Success` with round-trip time in seconds.
            * `Failure` - if failed or timed out.
        """
        try:
            rtt = self.__ping(addr)
        except ProbeFailure as e:
            return Failure(e.reason, e.detail)
        return Success(rtt)
