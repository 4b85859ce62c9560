"""
FastAPI inspection API for a running port simulation.

Run with:
    pip install "portsim[web]"
    python -m uvicorn portsim.web.app:app --reload --port 8000

Set PORTSIM_SNAPSHOT to a snapshot file to serve that port instead of
the built-in demo port.
"""

import os
import threading
from datetime import datetime

try:
    from fastapi import FastAPI, Query
    from fastapi.responses import JSONResponse, PlainTextResponse
except ImportError:
    raise ImportError(
        "FastAPI is required for the web interface. "
        "Install with: pip install fastapi uvicorn"
    )

from portsim.config.constants import MAX_TICK_REQUEST_MINUTES
from portsim.data_collection.demo_data import build_demo_port
from portsim.services.port import Port
from portsim.services.simulation import load_port, run_simulation, summarize_port
from portsim.utils.exceptions import BadEncodingError
from portsim.utils.logger import get_logger
from portsim.utils.registry import Registry

logger = get_logger(__name__)

app = FastAPI(
    title="Port Simulator",
    description="Minute-by-minute cargo port simulation",
    version="0.1.0",
)

registry = Registry()
port: Port | None = None
# Endpoints run in the server's threadpool; every access to port/registry holds this
_lock = threading.Lock()


def _get_port() -> Port:
    """Lazily build the served port from PORTSIM_SNAPSHOT or the demo."""
    global port
    if port is None:
        snapshot = os.environ.get("PORTSIM_SNAPSHOT")
        registry.reset()
        if snapshot:
            port = load_port(snapshot, registry)
        else:
            port = build_demo_port(registry)
    return port


def _serve(view, rebuild: bool = False):
    """Apply ``view`` to the served port, reporting a port that cannot be built as a 500."""
    global port
    with _lock:
        if rebuild:
            port = None
        try:
            return view(_get_port())
        except (BadEncodingError, OSError) as e:
            logger.error("Failed to build port: %s", e)
            return JSONResponse(status_code=500, content={"error": str(e)})


@app.get("/api/health")
def health_check():
    return {"status": "ok", "timestamp": datetime.now().isoformat()}


@app.get("/api/port")
def port_state():
    """Current quays, queue, warehouse, pending movements and statistics."""
    return _serve(summarize_port)


@app.post("/api/tick")
def tick(minutes: int = Query(1, ge=1, le=MAX_TICK_REQUEST_MINUTES, description="Minutes to simulate")):
    """Advance the simulation and return the new state."""
    return _serve(lambda current: summarize_port(run_simulation(current, minutes)))


@app.get("/api/snapshot", response_class=PlainTextResponse)
def snapshot():
    """The port encoded in the snapshot file format."""
    return _serve(lambda current: current.encode())


def _statistics(current: Port) -> dict:
    return {"time": current.time, "evaluators": {e.name: e.statistics() for e in current.evaluators}}


@app.get("/api/evaluators")
def evaluators():
    return _serve(_statistics)


@app.post("/api/reset")
def reset():
    """Discard the current run and rebuild the port from its source."""
    return _serve(summarize_port, rebuild=True)
