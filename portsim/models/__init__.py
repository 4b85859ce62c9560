"""
Models package - contains domain models (Ship, Cargo, Quay, Movement)
"""

from .cargo import BulkCargo, BulkCargoType, Cargo, Container, ContainerType
from .movement import CargoMovement, Movement, MovementDirection, ShipMovement
from .quay import BulkQuay, ContainerQuay, Quay
from .ship import BulkCarrier, ContainerShip, NauticalFlag, Ship

__all__ = [
    "BulkCargo", "BulkCargoType", "Cargo", "Container", "ContainerType",
    "CargoMovement", "Movement", "MovementDirection", "ShipMovement",
    "BulkQuay", "ContainerQuay", "Quay",
    "BulkCarrier", "ContainerShip", "NauticalFlag", "Ship",
]
