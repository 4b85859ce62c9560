"""
Cargo models - bulk cargo and shipping containers.

Both variants self-register in the Registry passed at construction.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from portsim.utils.registry import Registry
from portsim.utils.validation import require_non_negative, require_text


class BulkCargoType(Enum):
    GRAIN = "GRAIN"
    MINERALS = "MINERALS"
    COAL = "COAL"
    OIL = "OIL"
    OTHER = "OTHER"


class ContainerType(Enum):
    STANDARD = "STANDARD"
    OPEN_TOP = "OPEN_TOP"
    REEFER = "REEFER"
    TANKER = "TANKER"
    OTHER = "OTHER"


class _CargoBase:
    """Identity and destination shared by every cargo variant."""

    def __init__(self, cargo_id: int, destination: str, registry: Registry):
        require_non_negative("Cargo ID", cargo_id)
        require_text("Cargo destination", destination)
        if registry.cargo.exists(cargo_id):
            raise ValueError(f"Cargo ID must be unique: {cargo_id}")
        self.id = cargo_id
        self.destination = destination

    def _key(self) -> tuple:
        return (type(self).__name__, self.id, self.destination)

    def __eq__(self, other) -> bool:
        if not isinstance(other, _CargoBase):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return f"{type(self).__name__} {self.id} to {self.destination}"


class BulkCargo(_CargoBase):
    """Loose cargo measured in tonnes, e.g. grain or coal."""

    def __init__(
        self,
        cargo_id: int,
        destination: str,
        tonnage: int,
        cargo_type: BulkCargoType,
        *,
        registry: Registry,
    ):
        super().__init__(cargo_id, destination, registry)
        self.tonnage = require_non_negative("Cargo tonnage", tonnage)
        self.type = cargo_type
        registry.cargo.register(cargo_id, self)

    def _key(self) -> tuple:
        return super()._key() + (self.type, self.tonnage)

    def __str__(self) -> str:
        return f"{super().__str__()} [{self.type.value} - {self.tonnage}]"

    def __repr__(self) -> str:
        return (f"BulkCargo(id={self.id}, destination={self.destination!r}, "
                f"tonnage={self.tonnage}, type={self.type.value})")


class Container(_CargoBase):
    """A single shipping container."""

    def __init__(
        self,
        cargo_id: int,
        destination: str,
        container_type: ContainerType,
        *,
        registry: Registry,
    ):
        super().__init__(cargo_id, destination, registry)
        self.type = container_type
        registry.cargo.register(cargo_id, self)

    def _key(self) -> tuple:
        return super()._key() + (self.type,)

    def __str__(self) -> str:
        return f"{super().__str__()} [{self.type.value}]"

    def __repr__(self) -> str:
        return (f"Container(id={self.id}, destination={self.destination!r}, "
                f"type={self.type.value})")


Cargo = Union[BulkCargo, Container]
