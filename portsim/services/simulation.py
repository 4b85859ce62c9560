"""
Simulation service - drives a port and moves snapshots to and from disk.
"""

from __future__ import annotations

from pathlib import Path

from portsim.models.ship import BulkCarrier, ContainerShip
from portsim.services.port import Port
from portsim.services.snapshot import decode_port
from portsim.utils.logger import get_logger
from portsim.utils.registry import Registry

logger = get_logger(__name__)


def load_port(path: str | Path, registry: Registry) -> Port:
    """
    Read a snapshot file into a new Port.

    Args:
        path: Snapshot file
        registry: Empty registry to populate

    Returns:
        The decoded Port
    """
    text = Path(path).read_text(encoding="utf-8")
    port = decode_port(text, registry)
    logger.info("Loaded %s from %s", port, path)
    return port


def save_port(port: Port, path: str | Path):
    """Write the port's snapshot, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(port.encode() + "\n", encoding="utf-8")
    logger.info("Saved %s to %s", port, path)


def run_simulation(port: Port, minutes: int) -> Port:
    """Advance the port ``minutes`` ticks."""
    if minutes < 0:
        raise ValueError(f"minutes must be greater than or equal to 0: {minutes}")
    start = port.time
    for _ in range(minutes):
        port.elapse_one_minute()
    logger.info("Simulated %s from t=%d to t=%d", port.name, start, port.time)
    return port


def _ship_summary(ship) -> dict:
    if isinstance(ship, BulkCarrier):
        kind = "bulk"
    elif isinstance(ship, ContainerShip):
        kind = "container"
    else:
        raise TypeError(f"Unknown ship kind: {type(ship).__name__}")
    return {
        "imo_number": ship.imo_number,
        "name": ship.name,
        "kind": kind,
        "origin": ship.origin_flag,
        "flag": ship.flag.value,
        "capacity": ship.capacity,
        "cargo_ids": [c.id for c in ship.cargo_aboard()],
    }


def summarize_port(port: Port) -> dict:
    """JSON-friendly view of the port state, used by the CLI and web API."""
    return {
        "name": port.name,
        "time": port.time,
        "quays": [
            {
                "id": quay.id,
                "kind": type(quay).__name__,
                "capacity": quay.capacity,
                "ship": None if quay.ship is None else _ship_summary(quay.ship),
            }
            for quay in port.quays
        ],
        "queue": [_ship_summary(ship) for ship in port.ship_queue.ships],
        "next_to_dock": (
            None if port.ship_queue.peek() is None else port.ship_queue.peek().imo_number
        ),
        "warehouse": [str(cargo) for cargo in port.stored_cargo],
        "pending_movements": [str(movement) for movement in port.movements],
        "evaluators": {e.name: e.statistics() for e in port.evaluators},
    }
