"""
Offshore ship queue with a fixed dispatch priority.

Ships are kept in arrival order and never reordered. Which ship is
dispatched next is decided on every peek/poll from the current contents,
because a ship's flag can change while it waits:

  1. earliest ship flying BRAVO   (dangerous cargo)
  2. earliest ship flying WHISKEY (medical assistance)
  3. earliest ship flying HOTEL   (ready to dock)
  4. earliest container ship
  5. earliest ship overall
"""

from __future__ import annotations

from typing import Iterator

from portsim.config.constants import PRIORITY_FLAGS
from portsim.models.ship import ContainerShip, NauticalFlag, Ship

_FLAG_TIERS = tuple(NauticalFlag(name) for name in PRIORITY_FLAGS)


class ShipQueue:
    """Ships waiting offshore for a free quay."""

    def __init__(self, ships: list[Ship] | None = None):
        self._queue: list[Ship] = list(ships) if ships else []

    def add(self, ship: Ship):
        self._queue.append(ship)

    def peek(self) -> Ship | None:
        """The ship poll() would return, or None when the queue is empty."""
        if not self._queue:
            return None
        for flag in _FLAG_TIERS:
            for ship in self._queue:
                if ship.flag is flag:
                    return ship
        for ship in self._queue:
            if isinstance(ship, ContainerShip):
                return ship
        return self._queue[0]

    def poll(self) -> Ship | None:
        ship = self.peek()
        if ship is not None:
            # Remove by identity; equal-but-distinct ships keep their places
            index = next(i for i, queued in enumerate(self._queue) if queued is ship)
            del self._queue[index]
        return ship

    @property
    def ships(self) -> list[Ship]:
        """Queue contents in arrival order (a copy)."""
        return list(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Ship]:
        return iter(list(self._queue))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShipQueue):
            return NotImplemented
        return self._queue == other._queue

    def __hash__(self) -> int:
        return hash(tuple(self._queue))

    def __repr__(self) -> str:
        return f"ShipQueue({[ship.imo_number for ship in self._queue]})"
