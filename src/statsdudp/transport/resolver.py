from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from dataclasses import dataclass
from typing import Sequence

from statsdudp.transport.errors import AddressResolutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    address: str
    port: int

    @property
    def sockaddr(self) -> tuple[str, int]:
        return (self.address, self.port)

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


def _literal_ipv4(name: str) -> str | None:
    """
    Return the IPv4 text for a literal address, None if name is not a literal.
    IPv6 literals are only accepted when they carry an IPv4-mapped address.
    """
    try:
        ip = ipaddress.ip_address(name)
    except ValueError:
        return None

    if ip.version == 4:
        return name
    mapped = ip.ipv4_mapped
    if mapped is None:
        raise AddressResolutionError(f"IPv6 address {name!r} has no IPv4 form")
    return str(mapped)


def _pick_ipv4(name: str, infos: Sequence[tuple]) -> str:
    # the IPv4 address is usually the last one returned, but not always
    for family, _type, _proto, _canon, sockaddr in reversed(infos):
        if family == socket.AF_INET:
            return sockaddr[0]
    raise AddressResolutionError(f"no IPv4 address found for {name!r}")


def resolve(name: str, port: int) -> Endpoint:
    literal = _literal_ipv4(name)
    if literal is not None:
        return Endpoint(literal, port)

    try:
        infos = socket.getaddrinfo(name, port, type=socket.SOCK_DGRAM)
    except OSError as e:
        raise AddressResolutionError(f"could not resolve {name!r}: {e}") from e

    endpoint = Endpoint(_pick_ipv4(name, infos), port)
    logger.debug("resolved %s to %s", name, endpoint)
    return endpoint


async def resolve_async(name: str, port: int) -> Endpoint:
    """Same as resolve(), but the name lookup runs through the running loop."""
    literal = _literal_ipv4(name)
    if literal is not None:
        return Endpoint(literal, port)

    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(name, port, type=socket.SOCK_DGRAM)
    except OSError as e:
        raise AddressResolutionError(f"could not resolve {name!r}: {e}") from e

    endpoint = Endpoint(_pick_ipv4(name, infos), port)
    logger.debug("resolved %s to %s", name, endpoint)
    return endpoint
