from __future__ import annotations

import asyncio
import logging
import selectors
import socket

from statsdudp.transport.errors import TransportError
from statsdudp.transport.resolver import Endpoint, resolve, resolve_async
from statsdudp.transport.splitter import iter_split

logger = logging.getLogger(__name__)


class UdpTransport:
    """
    Owns one IPv4 datagram socket and the endpoint it sends to.
    The socket is non-blocking at the OS level: send_to() waits for it,
    send_to_async() lets the event loop wait for it.
    """

    def __init__(self, endpoint: Endpoint):
        self._endpoint = endpoint
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.setblocking(False)
        self._closed = False
        logger.info("udp transport open to %s", endpoint)

    @classmethod
    def open(cls, name: str, port: int) -> UdpTransport:
        # resolve before creating the socket so a bad name leaks nothing
        return cls(resolve(name, port))

    @classmethod
    async def open_async(cls, name: str, port: int) -> UdpTransport:
        return cls(await resolve_async(name, port))

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise TransportError(f"transport to {self._endpoint} is closed")

    def _wait_writable(self) -> None:
        with selectors.DefaultSelector() as sel:
            sel.register(self._sock, selectors.EVENT_WRITE)
            sel.select()

    def send_to(self, data: bytes) -> int:
        self._check_open()
        try:
            while True:
                try:
                    return self._sock.sendto(data, self._endpoint.sockaddr)
                except BlockingIOError:
                    # kernel send buffer full; block until it drains
                    self._wait_writable()
        except OSError as e:
            raise TransportError(f"send to {self._endpoint} failed: {e}") from e

    async def send_to_async(self, data: bytes) -> int:
        self._check_open()
        loop = asyncio.get_running_loop()
        try:
            return await loop.sock_sendto(self._sock, data, self._endpoint.sockaddr)
        except OSError as e:
            raise TransportError(f"send to {self._endpoint} failed: {e}") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._sock.close()
        logger.info("udp transport to %s closed", self._endpoint)

    def __enter__(self) -> UdpTransport:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class UdpSender:
    def __init__(self, transport: UdpTransport, max_packet_size: int):
        self._transport = transport
        self._max_packet_size = max_packet_size

    def send(self, text: str) -> None:
        """
        Send text as one or more datagrams, in order.
        A failed chunk raises TransportError; chunks after it are not sent.
        """
        for chunk in iter_split(text.encode("utf-8"), self._max_packet_size):
            self._transport.send_to(chunk)
            logger.debug("sent %d bytes to %s", len(chunk), self._transport.endpoint)


class AsyncUdpSender:
    def __init__(self, transport: UdpTransport, max_packet_size: int):
        self._transport = transport
        self._max_packet_size = max_packet_size

    async def send(self, text: str) -> None:
        # one chunk in flight at a time keeps lines in order on the wire
        for chunk in iter_split(text.encode("utf-8"), self._max_packet_size):
            await self._transport.send_to_async(chunk)
            logger.debug("sent %d bytes to %s", len(chunk), self._transport.endpoint)
