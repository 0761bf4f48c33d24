import pytest

from statsdudp.config.settings import (
    DEFAULT_MAX_PACKET_SIZE,
    DEFAULT_PORT,
    ConfigurationError,
    Settings,
    get_settings,
)


def test_defaults():
    assert get_settings() == Settings("localhost", DEFAULT_PORT, DEFAULT_MAX_PACKET_SIZE)
    assert DEFAULT_PORT == 8125
    assert DEFAULT_MAX_PACKET_SIZE == 8192


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("DD_AGENT_HOST", "agent.local")
    monkeypatch.setenv("DD_DOGSTATSD_PORT", "9125")

    s = get_settings()
    assert (s.host, s.port) == ("agent.local", 9125)


def test_explicit_values_beat_env(monkeypatch):
    monkeypatch.setenv("DD_AGENT_HOST", "agent.local")
    monkeypatch.setenv("DD_DOGSTATSD_PORT", "not-a-port")

    # an explicit port means the env var is never parsed
    s = get_settings("10.0.0.5", 8126, 0)
    assert s == Settings("10.0.0.5", 8126, 0)


@pytest.mark.parametrize("raw", ["abc", "", "81.25", "0", "70000", "-1"])
def test_bad_env_port_fails_fast(monkeypatch, raw):
    monkeypatch.setenv("DD_DOGSTATSD_PORT", raw)
    with pytest.raises(ConfigurationError, match="DD_DOGSTATSD_PORT"):
        get_settings()


@pytest.mark.parametrize("port", [-5, 65536])
def test_bad_explicit_port(port):
    with pytest.raises(ConfigurationError):
        get_settings(port=port)


def test_negative_packet_size_rejected():
    with pytest.raises(ConfigurationError):
        get_settings(max_packet_size=-1)


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_explicit_port_zero_means_not_supplied(monkeypatch):
    assert get_settings(port=0).port == DEFAULT_PORT

    monkeypatch.setenv("DD_DOGSTATSD_PORT", "9125")
    assert get_settings(port=0).port == 9125
