from __future__ import annotations

from statsdudp.config.settings import DEFAULT_MAX_PACKET_SIZE, Settings, get_settings
from statsdudp.transport.resolver import Endpoint
from statsdudp.transport.udp import AsyncUdpSender, UdpSender, UdpTransport


class StatsdUdp:
    """
    Sends pre-formatted metric lines to a StatsD/DogStatsD collector over UDP.

    The destination is resolved to IPv4 once, here; AddressResolutionError and
    ConfigurationError surface from the constructor, TransportError from send.
    Batches larger than max_packet_size are split on newlines (0 disables it).
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        max_packet_size: int = DEFAULT_MAX_PACKET_SIZE,
        transport: UdpTransport | None = None,
    ):
        self._settings = get_settings(host, port, max_packet_size)
        if transport is None:
            transport = UdpTransport.open(self._settings.host, self._settings.port)
        self._transport = transport
        self._sender = UdpSender(self._transport, self._settings.max_packet_size)
        self._async_sender = AsyncUdpSender(self._transport, self._settings.max_packet_size)

    @classmethod
    def from_settings(cls, settings: Settings) -> StatsdUdp:
        return cls(settings.host, settings.port, settings.max_packet_size)

    @classmethod
    async def open_async(
        cls,
        host: str | None = None,
        port: int | None = None,
        max_packet_size: int = DEFAULT_MAX_PACKET_SIZE,
    ) -> StatsdUdp:
        """Like the constructor, but the name lookup does not block the running loop."""
        settings = get_settings(host, port, max_packet_size)
        transport = await UdpTransport.open_async(settings.host, settings.port)
        return cls(settings.host, settings.port, settings.max_packet_size, transport=transport)

    @property
    def endpoint(self) -> Endpoint:
        return self._transport.endpoint

    @property
    def max_packet_size(self) -> int:
        return self._settings.max_packet_size

    def send(self, text: str) -> None:
        self._sender.send(text)

    async def send_async(self, text: str) -> None:
        await self._async_sender.send(text)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> StatsdUdp:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
