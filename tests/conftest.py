import pytest
from fastapi.testclient import TestClient

from services.collector_sim.app.main import app
from statsdudp.api.client import CollectorApiClient


@pytest.fixture(scope="session")
def collector_http():
    """
    Runs the collector simulator in-process for the test session.
    TestClient keeps the app's event loop alive in a background thread, so the
    UDP listener created at startup keeps receiving between requests.
    """
    with pytest.MonkeyPatch.context() as mp:
        # ephemeral UDP port; tests read the real one from /health
        mp.setenv("COLLECTOR_UDP_HOST", "127.0.0.1")
        mp.setenv("COLLECTOR_UDP_PORT", "0")
        with TestClient(app) as client:
            yield client


@pytest.fixture
def collector_api(collector_http):
    api = CollectorApiClient(client=collector_http)
    # each test starts with an empty inbox
    api.reset()
    return api


@pytest.fixture
def collector_addr(collector_api):
    health = collector_api.health()
    return health["udp_host"], health["udp_port"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """
    Keep a developer's DD_* variables out of the tests.
    """
    monkeypatch.delenv("DD_AGENT_HOST", raising=False)
    monkeypatch.delenv("DD_DOGSTATSD_PORT", raising=False)
