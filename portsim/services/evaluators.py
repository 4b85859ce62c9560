"""
Statistics evaluators - passive observers of a running port.

The port calls ``on_movement_processed`` once for every movement it
executes and ``on_minute_elapsed`` once per tick, in registration order.
Evaluators only count; they never change simulation state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from typing import TYPE_CHECKING, Callable

from portsim.config.constants import THROUGHPUT_WINDOW_MINUTES
from portsim.models.cargo import BulkCargo, Container
from portsim.models.movement import CargoMovement, Movement, MovementDirection, ShipMovement

if TYPE_CHECKING:
    from portsim.services.port import Port


class StatisticsEvaluator(ABC):
    """Base observer; keeps its own minute counter."""

    def __init__(self):
        self.time = 0

    @abstractmethod
    def on_movement_processed(self, movement: Movement):
        ...

    def on_minute_elapsed(self):
        self.time += 1

    @abstractmethod
    def statistics(self) -> dict:
        """Current figures, keyed for display."""

    @property
    def name(self) -> str:
        return type(self).__name__


class CargoDecompositionEvaluator(StatisticsEvaluator):
    """Tallies inbound cargo by class, bulk type and container type."""

    def __init__(self):
        super().__init__()
        self._cargo = Counter()
        self._bulk = Counter()
        self._containers = Counter()

    def on_movement_processed(self, movement: Movement):
        if movement.direction is not MovementDirection.INBOUND:
            return
        if isinstance(movement, ShipMovement):
            pieces = movement.ship.cargo_aboard()
        elif isinstance(movement, CargoMovement):
            pieces = movement.cargo
        else:
            raise TypeError(f"Unknown movement kind: {type(movement).__name__}")

        for piece in pieces:
            self._cargo[type(piece).__name__] += 1
            if isinstance(piece, BulkCargo):
                self._bulk[piece.type] += 1
            elif isinstance(piece, Container):
                self._containers[piece.type] += 1
            else:
                raise TypeError(f"Unknown cargo kind: {type(piece).__name__}")

    def cargo_distribution(self) -> dict[str, int]:
        return dict(self._cargo)

    def bulk_cargo_distribution(self) -> dict:
        return dict(self._bulk)

    def container_distribution(self) -> dict:
        return dict(self._containers)

    def statistics(self) -> dict:
        return {
            "cargo": self.cargo_distribution(),
            "bulk_cargo": {k.value: v for k, v in self._bulk.items()},
            "containers": {k.value: v for k, v in self._containers.items()},
        }


class QuayOccupancyEvaluator(StatisticsEvaluator):
    """Reports how many of the port's quays currently hold a ship."""

    def __init__(self, port: Port):
        super().__init__()
        self.port = port

    def quays_occupied(self) -> int:
        return sum(1 for quay in self.port.quays if not quay.is_empty())

    def on_movement_processed(self, movement: Movement):
        pass

    def statistics(self) -> dict:
        return {"quays_occupied": self.quays_occupied()}


class ShipFlagEvaluator(StatisticsEvaluator):
    """Counts arriving ships by the country they sail from."""

    def __init__(self):
        super().__init__()
        self._flags = Counter()

    def on_movement_processed(self, movement: Movement):
        if isinstance(movement, ShipMovement) and movement.direction is MovementDirection.INBOUND:
            self._flags[movement.ship.origin_flag] += 1

    def flag_distribution(self) -> dict[str, int]:
        return dict(self._flags)

    def flag_statistics(self, flag: str) -> int:
        return self._flags.get(flag, 0)

    def statistics(self) -> dict:
        return {"flags": self.flag_distribution()}


class ShipThroughputEvaluator(StatisticsEvaluator):
    """Ships that departed within the last hour."""

    def __init__(self):
        super().__init__()
        self._departures: list[int] = []

    def on_movement_processed(self, movement: Movement):
        if isinstance(movement, ShipMovement) and movement.direction is MovementDirection.OUTBOUND:
            self._departures.append(self.time)

    def on_minute_elapsed(self):
        super().on_minute_elapsed()
        self._departures = [
            t for t in self._departures if self.time - t <= THROUGHPUT_WINDOW_MINUTES
        ]

    def throughput_per_hour(self) -> int:
        return len(self._departures)

    def statistics(self) -> dict:
        return {"ships_last_hour": self.throughput_per_hour()}


# Snapshot name -> factory taking the owning port
EVALUATOR_TYPES: dict[str, Callable[[Port], StatisticsEvaluator]] = {
    "CargoDecompositionEvaluator": lambda port: CargoDecompositionEvaluator(),
    "QuayOccupancyEvaluator": QuayOccupancyEvaluator,
    "ShipFlagEvaluator": lambda port: ShipFlagEvaluator(),
    "ShipThroughputEvaluator": lambda port: ShipThroughputEvaluator(),
}
