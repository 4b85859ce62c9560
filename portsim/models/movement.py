"""
Movement models - scheduled ship and cargo events.

A movement is immutable. It is queued on the Port with schedule_movement
and consumed exactly once during the tick whose time equals ``time``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from portsim.models.cargo import Cargo
from portsim.models.ship import Ship


class MovementDirection(Enum):
    INBOUND = "INBOUND"
    OUTBOUND = "OUTBOUND"


def _check_time(time: int):
    if time < 0:
        raise ValueError(f"Time must be greater than or equal to 0: {time}")


@dataclass(frozen=True)
class ShipMovement:
    """A ship arriving at, or departing from, the port."""
    time: int
    direction: MovementDirection
    ship: Ship

    def __post_init__(self):
        _check_time(self.time)

    def __str__(self) -> str:
        return (f"{self.direction.value} ShipMovement to occur at {self.time} "
                f"involving the ship {self.ship.name}")


@dataclass(frozen=True)
class CargoMovement:
    """Cargo delivered to, or collected from, the warehouse by land."""
    time: int
    direction: MovementDirection
    cargo: tuple[Cargo, ...]

    def __post_init__(self):
        _check_time(self.time)
        # Accept any iterable but store a tuple so the movement stays hashable
        object.__setattr__(self, "cargo", tuple(self.cargo))
        if not self.cargo:
            raise ValueError("A cargo movement must involve at least one piece of cargo")

    def __str__(self) -> str:
        return (f"{self.direction.value} CargoMovement to occur at {self.time} "
                f"involving {len(self.cargo)} piece(s) of cargo")


Movement = Union[ShipMovement, CargoMovement]
