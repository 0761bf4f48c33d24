import asyncio
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from pydantic import BaseModel

from services.collector_sim.app.core.state import CollectorModel

HTTP_HOST = os.getenv("COLLECTOR_HTTP_HOST", "127.0.0.1")
HTTP_PORT = int(os.getenv("COLLECTOR_HTTP_PORT", "8000"))

MODEL = CollectorModel()

class UdpProto(asyncio.DatagramProtocol):
    def connection_made(self, transport):
        self.transport = transport

    def datagram_received(self, data: bytes, addr):
        # a collector never answers; just keep what arrived, in arrival order
        MODEL.record(data, addr[:2])

@asynccontextmanager
async def lifespan(app: FastAPI):
    # read at startup so tests can ask for an ephemeral port (0)
    host = os.getenv("COLLECTOR_UDP_HOST", "127.0.0.1")
    port = int(os.getenv("COLLECTOR_UDP_PORT", "8125"))

    loop = asyncio.get_running_loop()
    transport, _ = await loop.create_datagram_endpoint(
        lambda: UdpProto(),
        local_addr=(host, port),
    )
    app.state.udp_host, app.state.udp_port = transport.get_extra_info("sockname")[:2]
    try:
        yield
    finally:
        transport.close()

app = FastAPI(title="StatsD Collector Simulator", version="0.1.0", lifespan=lifespan)

class DatagramOut(BaseModel):
    data: str
    size: int
    source: str
    received_at: float

class ReceivedOut(BaseModel):
    count: int
    datagrams: list[DatagramOut]

@app.get("/health")
def health():
    return {
        "status": "ok",
        "udp_host": getattr(app.state, "udp_host", None),
        "udp_port": getattr(app.state, "udp_port", None),
    }

@app.get("/received", response_model=ReceivedOut)
def received():
    datagrams = [
        DatagramOut(
            data=d.data.decode("utf-8", errors="replace"),
            size=len(d.data),
            source=f"{d.source[0]}:{d.source[1]}",
            received_at=d.received_at,
        )
        for d in MODEL.snapshot()
    ]
    return ReceivedOut(count=len(datagrams), datagrams=datagrams)

@app.post("/control/reset")
def reset():
    MODEL.reset()
    return {"status": "reset", "reset_count": MODEL.reset_count}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=HTTP_HOST,
        port=HTTP_PORT,
        reload=False)
