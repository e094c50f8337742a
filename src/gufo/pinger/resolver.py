# ---------------------------------------------------------------------
# Gufo Pinger: Address resolver
# ---------------------------------------------------------------------
# Copyright (C) 2026, Gufo Labs
# ---------------------------------------------------------------------

"""
Target address resolution.

Attributes:
    Target: Resolved IPv4/IPv6 address.
"""

# Python modules
import ipaddress
import logging
import socket
from typing import List, Optional, Union

# Gufo Labs modules
from .error import ResolutionError
from .proto import LookupProto

Target = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def getaddrinfo_lookup(name: str) -> List[str]:
    """
    Resolve host name using system resolver.

    Addresses come in the RFC 6724 destination selection order
    of the system resolver, so a dual-stack host name is
    usually resolved to IPv6 first. Pass a literal address
    to ping the particular address family.

    Args:
        name: Host name.

    Returns:
        List of addresses in the resolver's order,
        without duplicates.
    """
    r: List[str] = []
    for _, _, _, _, sockaddr in socket.getaddrinfo(
        name, None, type=socket.SOCK_DGRAM
    ):
        addr = str(sockaddr[0])
        if addr not in r:
            r.append(addr)
    return r


class Resolver(object):
    """
    Convert user-supplied string to the target address.

    Literal addresses are returned as is. Host names are
    looked up once.

    Args:
        lookup: DNS lookup callable. Use system resolver when empty.
        logger: Logger to use. Use module's logger when empty.

    Example:
        ``` py
        from gufo.pinger.resolver import Resolver

        target = Resolver().resolve("example.com")
        ```
    """

    def __init__(
        self: "Resolver",
        lookup: Optional[LookupProto] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.__lookup: LookupProto = lookup or getaddrinfo_lookup
        self.__logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_literal(address: str) -> Optional[Target]:
        """
        Parse literal IPv4/IPv6 address.

        Args:
            address: Address string.

        Returns:
            * Parsed address.
            * None - if `address` is not an IP address.
        """
        try:
            return ipaddress.ip_address(address)
        except ValueError:
            return None

    def resolve(self: "Resolver", address: str) -> Target:
        """
        Resolve address.

        Args:
            address: IP address or host name.

        Returns:
            Target address. First one reported by lookup
            for host names.

        Raises:
            ResolutionError: when no address found or lookup failed.
        """
        addr = self.parse_literal(address)
        if addr is not None:
            return addr
        try:
            found = self.__lookup(address)
        except (OSError, UnicodeError) as e:
            msg = f"Cannot resolve {address}: {e}"
            raise ResolutionError(msg) from e
        if not found:
            msg = f"No IP address found for {address}"
            raise ResolutionError(msg)
        addr = self.parse_literal(found[0])
        if addr is None:
            msg = f"Invalid address for {address}: {found[0]}"
            raise ResolutionError(msg)
        self.__logger.debug("Resolved %s to %s", address, addr)
        return addr
