"""
Ship models - bulk carriers and container ships.

Ships own the capability checks used by the port: whether they can dock
at a given quay and whether they can take on a given piece of cargo.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from portsim.config.constants import IMO_NUMBER_DIGITS, NAUTICAL_FLAG_MEANINGS
from portsim.models.cargo import BulkCargo, Container
from portsim.models.quay import BulkQuay, ContainerQuay
from portsim.utils.registry import Registry
from portsim.utils.validation import require_non_negative, require_text

_IMO_MIN = 10 ** (IMO_NUMBER_DIGITS - 1)
_IMO_MAX = 10 ** IMO_NUMBER_DIGITS - 1


class NauticalFlag(Enum):
    """Signal flag flown by a ship waiting offshore."""
    BRAVO = "BRAVO"
    HOTEL = "HOTEL"
    WHISKEY = "WHISKEY"
    NOVEMBER = "NOVEMBER"

    @property
    def meaning(self) -> str:
        return NAUTICAL_FLAG_MEANINGS[self.value]


def validate_imo_number(imo_number: int) -> int:
    if imo_number < 0:
        raise ValueError(f"The imoNumber of the ship must be positive: {imo_number}")
    if not _IMO_MIN <= imo_number <= _IMO_MAX:
        raise ValueError(
            f"The imoNumber of the ship must have {IMO_NUMBER_DIGITS} digits "
            f"(no leading zeros): {imo_number}"
        )
    return imo_number


class _ShipBase:
    """Identity, origin and signal flag shared by every ship variant."""

    def __init__(
        self,
        imo_number: int,
        name: str,
        origin_flag: str,
        flag: NauticalFlag,
        capacity: int,
        registry: Registry,
    ):
        validate_imo_number(imo_number)
        if registry.ships.exists(imo_number):
            raise ValueError(f"The imoNumber of the ship must be unique: {imo_number}")
        self.imo_number = imo_number
        self.name = require_text("Ship name", name)
        self.origin_flag = require_text("Ship origin", origin_flag)
        self.flag = flag
        self.capacity = require_non_negative("Ship capacity", capacity)

    def cargo_aboard(self) -> list:
        raise NotImplementedError

    def _key(self) -> tuple:
        return (type(self).__name__, self.imo_number, self.name,
                self.origin_flag, self.flag, self.capacity)

    def __eq__(self, other) -> bool:
        if not isinstance(other, _ShipBase):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return f"{type(self).__name__} {self.name} from {self.origin_flag} [{self.flag.value}]"


class BulkCarrier(_ShipBase):
    """Carries at most one unit of bulk cargo, bounded by tonnage."""

    def __init__(
        self,
        imo_number: int,
        name: str,
        origin_flag: str,
        flag: NauticalFlag,
        capacity: int,
        *,
        registry: Registry,
    ):
        super().__init__(imo_number, name, origin_flag, flag, capacity, registry)
        self.cargo: BulkCargo | None = None
        registry.ships.register(imo_number, self)

    def can_dock(self, quay) -> bool:
        if isinstance(quay, BulkQuay):
            return self.cargo is None or quay.max_tonnage >= self.cargo.tonnage
        if isinstance(quay, ContainerQuay):
            return False
        raise TypeError(f"Unknown quay kind: {type(quay).__name__}")

    def can_load(self, cargo) -> bool:
        """Empty ship, bulk cargo within capacity, bound for our origin."""
        if self.cargo is not None or not isinstance(cargo, BulkCargo):
            return False
        if cargo.tonnage > self.capacity:
            return False
        return cargo.destination == self.origin_flag

    def load_cargo(self, cargo: BulkCargo):
        if not self.can_load(cargo):
            raise ValueError(f"{self} cannot load {cargo}")
        self.cargo = cargo

    def unload_cargo(self) -> list[BulkCargo]:
        """Discharge the cargo aboard; an empty ship returns []."""
        if self.cargo is None:
            return []
        unloaded, self.cargo = self.cargo, None
        return [unloaded]

    def cargo_aboard(self) -> list[BulkCargo]:
        return [] if self.cargo is None else [self.cargo]

    def __str__(self) -> str:
        carrying = self.cargo.type.value if self.cargo is not None else "nothing"
        return f"{super().__str__()} carrying {carrying}"

    def __repr__(self) -> str:
        return f"BulkCarrier(imo_number={self.imo_number}, name={self.name!r})"


class ContainerShip(_ShipBase):
    """Carries up to ``capacity`` containers."""

    def __init__(
        self,
        imo_number: int,
        name: str,
        origin_flag: str,
        flag: NauticalFlag,
        capacity: int,
        *,
        registry: Registry,
    ):
        super().__init__(imo_number, name, origin_flag, flag, capacity, registry)
        self.containers: list[Container] = []
        registry.ships.register(imo_number, self)

    def can_dock(self, quay) -> bool:
        if isinstance(quay, ContainerQuay):
            return quay.max_containers >= len(self.containers)
        if isinstance(quay, BulkQuay):
            return False
        raise TypeError(f"Unknown quay kind: {type(quay).__name__}")

    def can_load(self, cargo) -> bool:
        if len(self.containers) >= self.capacity or not isinstance(cargo, Container):
            return False
        return cargo.destination == self.origin_flag

    def load_cargo(self, cargo: Container):
        if not self.can_load(cargo):
            raise ValueError(f"{self} cannot load {cargo}")
        self.containers.append(cargo)

    def unload_cargo(self) -> list[Container]:
        unloaded, self.containers = self.containers, []
        return unloaded

    def cargo_aboard(self) -> list[Container]:
        return list(self.containers)

    def __str__(self) -> str:
        return f"{super().__str__()} carrying {len(self.containers)} containers"

    def __repr__(self) -> str:
        return f"ContainerShip(imo_number={self.imo_number}, name={self.name!r})"


Ship = Union[BulkCarrier, ContainerShip]
