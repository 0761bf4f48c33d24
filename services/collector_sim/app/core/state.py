from __future__ import annotations
from dataclasses import dataclass, field
import threading
import time

@dataclass(frozen=True)
class Datagram:
    data: bytes
    source: tuple[str, int]
    received_at: float

@dataclass
class CollectorModel:
    datagrams: list[Datagram] = field(default_factory=list)
    reset_count: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record(self, data: bytes, source: tuple[str, int]) -> None:
        with self._lock:
            self.datagrams.append(Datagram(data, source, time.time()))

    def snapshot(self) -> list[Datagram]:
        with self._lock:
            return list(self.datagrams)

    def reset(self) -> None:
        with self._lock:
            self.datagrams.clear()
            self.reset_count += 1
