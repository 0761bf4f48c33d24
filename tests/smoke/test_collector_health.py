import pytest

@pytest.mark.smoke
def test_health(collector_api):
    resp = collector_api.health()
    assert resp["status"] == "ok"
    assert resp["udp_port"] > 0

@pytest.mark.smoke
def test_reset_clears_inbox(collector_api):
    assert collector_api.received() == []
    resp = collector_api.reset()
    assert resp["status"] == "reset"
