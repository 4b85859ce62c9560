"""
Port tick engine.

The Port owns the offshore ship queue, the quays, the warehouse and the
pending movements. ``elapse_one_minute`` advances all of them one
simulated minute, always in the same order:

  1. advance the clock
  2. every DOCKING_INTERVAL_MINUTES: offer the queue to each empty quay
  3. every UNLOADING_INTERVAL_MINUTES: docked ships discharge to the warehouse
  4. execute every movement timed at or before the new minute, in schedule
     order (one scheduled for the current minute therefore runs next tick)
  5. tell every evaluator a minute has passed

Docking visits quays in the order they were added and re-peeks the
queue for each empty quay, so several quays may take a ship in the same
tick (one ship per quay). A queue head that does not fit one quay may
still fit the next.
"""

from __future__ import annotations

import heapq
import itertools

from portsim.config.constants import DOCKING_INTERVAL_MINUTES, UNLOADING_INTERVAL_MINUTES
from portsim.models.cargo import Cargo
from portsim.models.movement import CargoMovement, Movement, MovementDirection, ShipMovement
from portsim.models.quay import Quay
from portsim.models.ship import Ship
from portsim.services.evaluators import StatisticsEvaluator
from portsim.services.ship_queue import ShipQueue
from portsim.utils.logger import get_logger
from portsim.utils.registry import Registry
from portsim.utils.validation import require_text

logger = get_logger(__name__)


class Port:
    """A place where ships queue, dock, load and unload cargo."""

    def __init__(
        self,
        name: str,
        time: int = 0,
        ship_queue: ShipQueue | None = None,
        quays: list[Quay] | None = None,
        stored_cargo: list[Cargo] | None = None,
        *,
        registry: Registry,
    ):
        if time < 0:
            raise ValueError(f"Time must be greater than or equal to 0: {time}")
        self.name = require_text("Port name", name)
        self.time = time
        self.registry = registry
        self._ship_queue = ship_queue if ship_queue is not None else ShipQueue()
        self._quays: list[Quay] = list(quays) if quays else []
        self._stored_cargo: list[Cargo] = list(stored_cargo) if stored_cargo else []
        self._evaluators: list[StatisticsEvaluator] = []
        # (time, schedule sequence, movement): ties run in the order scheduled
        self._movements: list[tuple[int, int, Movement]] = []
        self._sequence = itertools.count()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def add_quay(self, quay: Quay):
        self._quays.append(quay)

    def schedule_movement(self, movement: Movement):
        """Queue a movement for execution at ``movement.time``.

        Movements run after the clock advances, so one timed at the current
        minute runs on the next tick rather than the one already elapsed.
        Times earlier than the current minute are rejected.
        """
        if movement.time < self.time:
            raise ValueError(
                f"Movement at {movement.time} should have already occurred (now {self.time})"
            )
        heapq.heappush(self._movements, (movement.time, next(self._sequence), movement))

    add_movement = schedule_movement

    def add_statistics_evaluator(self, evaluator: StatisticsEvaluator):
        """Register an observer; at most one evaluator of each class."""
        if any(type(existing) is type(evaluator) for existing in self._evaluators):
            logger.warning("%s already registered on %s, ignoring", evaluator.name, self.name)
            return
        self._evaluators.append(evaluator)

    register_evaluator = add_statistics_evaluator

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    @property
    def ship_queue(self) -> ShipQueue:
        return self._ship_queue

    @property
    def quays(self) -> list[Quay]:
        return list(self._quays)

    @property
    def stored_cargo(self) -> list[Cargo]:
        return list(self._stored_cargo)

    @property
    def movements(self) -> list[Movement]:
        """Pending movements in execution order."""
        return [movement for _, _, movement in sorted(self._movements, key=lambda e: e[:2])]

    @property
    def evaluators(self) -> list[StatisticsEvaluator]:
        return list(self._evaluators)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def elapse_one_minute(self):
        self.time += 1

        if self.time % DOCKING_INTERVAL_MINUTES == 0:
            self._dock_ships()

        if self.time % UNLOADING_INTERVAL_MINUTES == 0:
            self._unload_ships()

        while self._movements and self._movements[0][0] <= self.time:
            _, _, movement = heapq.heappop(self._movements)
            self.process_movement(movement)

        for evaluator in list(self._evaluators):
            evaluator.on_minute_elapsed()

    def _dock_ships(self):
        for quay in list(self._quays):
            if not quay.is_empty():
                continue
            ship = self._ship_queue.peek()
            if ship is None:
                break
            if ship.can_dock(quay):
                quay.ship_arrives(self._ship_queue.poll())
                logger.debug("t=%d: %s docked at quay %d", self.time, ship.name, quay.id)

    def _unload_ships(self):
        for quay in list(self._quays):
            if quay.ship is None:
                continue
            unloaded = quay.ship.unload_cargo()
            if unloaded:
                self._stored_cargo.extend(unloaded)
                logger.debug("t=%d: %s unloaded %d piece(s) of cargo",
                             self.time, quay.ship.name, len(unloaded))

    def process_movement(self, movement: Movement):
        """Apply a movement to the port, then report it to every evaluator."""
        if isinstance(movement, ShipMovement):
            if movement.direction is MovementDirection.INBOUND:
                self._ship_queue.add(movement.ship)
            else:
                self._ship_departs(movement.ship)
        elif isinstance(movement, CargoMovement):
            if movement.direction is MovementDirection.INBOUND:
                self._stored_cargo.extend(movement.cargo)
            else:
                leaving = {cargo.id for cargo in movement.cargo}
                self._stored_cargo = [c for c in self._stored_cargo if c.id not in leaving]
        else:
            raise TypeError(f"Unknown movement kind: {type(movement).__name__}")

        logger.debug("t=%d: processed %s", self.time, movement)
        for evaluator in list(self._evaluators):
            evaluator.on_movement_processed(movement)

    def _ship_departs(self, ship: Ship):
        # Load whatever is bound for the ship's home country, re-checking
        # capacity after every piece
        remaining = []
        for cargo in self._stored_cargo:
            if ship.can_load(cargo):
                ship.load_cargo(cargo)
            else:
                remaining.append(cargo)
        self._stored_cargo = remaining

        for quay in self._quays:
            if quay.ship is ship:
                quay.ship_departs()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def encode(self) -> str:
        from portsim.services.snapshot import encode_port
        return encode_port(self)

    @classmethod
    def from_string(cls, text: str, registry: Registry) -> Port:
        from portsim.services.snapshot import decode_port
        return decode_port(text, registry)

    def __str__(self) -> str:
        return f"Port {self.name} at t={self.time}"
