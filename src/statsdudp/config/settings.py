from __future__ import annotations

from dataclasses import dataclass
import os

from statsdudp.transport.errors import StatsdUdpError

HOST_ENV_VAR = "DD_AGENT_HOST"
PORT_ENV_VAR = "DD_DOGSTATSD_PORT"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8125
DEFAULT_MAX_PACKET_SIZE = 8192


class ConfigurationError(StatsdUdpError, ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    max_packet_size: int = DEFAULT_MAX_PACKET_SIZE


def _check_port(port: int, source: str) -> int:
    if not (1 <= port <= 65535):
        raise ConfigurationError(f"{source} out of range (1-65535): {port}")
    return port


def _port_from_env(default: int) -> int:
    raw = os.getenv(PORT_ENV_VAR)
    if raw is None:
        return default
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"Environment variable '{PORT_ENV_VAR}' bad format: {raw!r}") from None
    return _check_port(port, f"Environment variable '{PORT_ENV_VAR}'")


def get_settings(
    host: str | None = None,
    port: int | None = None,
    max_packet_size: int = DEFAULT_MAX_PACKET_SIZE,
) -> Settings:
    """
    Centralized configuration for the transport.
    Explicit arguments win, then DD_AGENT_HOST / DD_DOGSTATSD_PORT, then defaults.
    """
    # None or 0 both mean "not supplied"
    if not port:
        port = _port_from_env(DEFAULT_PORT)
    else:
        _check_port(port, "port")

    if max_packet_size < 0:
        raise ConfigurationError(f"max_packet_size must be >= 0 (0 disables splitting): {max_packet_size}")

    return Settings(
        host=host or os.getenv(HOST_ENV_VAR) or DEFAULT_HOST,
        port=port,
        max_packet_size=max_packet_size,
    )
