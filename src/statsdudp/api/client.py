from __future__ import annotations
import time

import httpx

class CollectorApiClient:
    def __init__(self, base_url: str = "http://127.0.0.1:8000", timeout_s: float = 2.0, client: httpx.Client | None = None):
        # an existing client (e.g. fastapi's TestClient) can be injected for in-process runs
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout_s)

    def close(self) -> None:
        self._client.close()

    def health(self) -> dict:
        r = self._client.get("/health")
        r.raise_for_status()
        return r.json()

    def received(self) -> list[str]:
        r = self._client.get("/received")
        r.raise_for_status()
        return [d["data"] for d in r.json()["datagrams"]]

    def reset(self) -> dict:
        r = self._client.post("/control/reset")
        r.raise_for_status()
        return r.json()

    def wait_for_datagrams(self, count: int, timeout_s: float = 2.0) -> list[str]:
        """
        Poll /received until at least `count` datagrams arrived.
        Returns whatever arrived by the deadline; UDP gives no stronger promise.
        """
        deadline = time.time() + timeout_s
        got = self.received()
        while len(got) < count and time.time() < deadline:
            time.sleep(0.02)
            got = self.received()
        return got
