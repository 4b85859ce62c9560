"""
Quay models - docking points with a type-specific capacity.

A quay holds at most one ship. Whether a ship may dock is decided by
the ship (see ``can_dock`` in ship.py); the quay only records occupancy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from portsim.utils.validation import require_non_negative

if TYPE_CHECKING:
    from portsim.models.ship import Ship


class _QuayBase:
    def __init__(self, quay_id: int):
        self.id = require_non_negative("Quay ID", quay_id)
        self.ship: Ship | None = None

    @property
    def capacity(self) -> int:
        raise NotImplementedError

    def ship_arrives(self, ship: Ship):
        self.ship = ship

    def ship_departs(self) -> Ship | None:
        """Detach and return the docked ship, or None if the quay was empty."""
        current, self.ship = self.ship, None
        return current

    def is_empty(self) -> bool:
        return self.ship is None

    def _key(self) -> tuple:
        imo = None if self.ship is None else self.ship.imo_number
        return (type(self).__name__, self.id, self.capacity, imo)

    def __eq__(self, other) -> bool:
        if not isinstance(other, _QuayBase):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key()[:3])

    def __str__(self) -> str:
        docked = "None" if self.ship is None else self.ship.imo_number
        return f"{type(self).__name__} {self.id} [Ship: {docked}] - {self.capacity}"

    def __repr__(self) -> str:
        return str(self)


class BulkQuay(_QuayBase):
    """Quay for bulk carriers, limited by the tonnage it can handle."""

    def __init__(self, quay_id: int, max_tonnage: int):
        super().__init__(quay_id)
        self.max_tonnage = require_non_negative("maxTonnage", max_tonnage)

    @property
    def capacity(self) -> int:
        return self.max_tonnage


class ContainerQuay(_QuayBase):
    """Quay for container ships, limited by the containers it can handle."""

    def __init__(self, quay_id: int, max_containers: int):
        super().__init__(quay_id)
        self.max_containers = require_non_negative("maxContainers", max_containers)

    @property
    def capacity(self) -> int:
        return self.max_containers


Quay = Union[BulkQuay, ContainerQuay]
