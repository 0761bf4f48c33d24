from __future__ import annotations


class StatsdUdpError(Exception):
    pass


class AddressResolutionError(StatsdUdpError):
    """No usable IPv4 address could be derived from the configured name."""


class TransportError(StatsdUdpError, OSError):
    """The socket refused a datagram. The original OSError is the __cause__."""
