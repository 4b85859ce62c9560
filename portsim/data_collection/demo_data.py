"""
Deterministic demo port for the CLI and web dashboard.

A small mixed port: two bulk quays, two container quays, five ships
arriving over the first few minutes and a handful of cargo deliveries
and departures during the first hour.
"""

from portsim.models.cargo import BulkCargo, BulkCargoType, Container, ContainerType
from portsim.models.movement import CargoMovement, MovementDirection, ShipMovement
from portsim.models.quay import BulkQuay, ContainerQuay
from portsim.models.ship import BulkCarrier, ContainerShip, NauticalFlag
from portsim.services.evaluators import EVALUATOR_TYPES
from portsim.services.port import Port
from portsim.utils.registry import Registry

DEMO_PORT_NAME = "Brisbane"

INBOUND = MovementDirection.INBOUND
OUTBOUND = MovementDirection.OUTBOUND


def build_demo_port(registry: Registry) -> Port:
    port = Port(DEMO_PORT_NAME, registry=registry)

    port.add_quay(BulkQuay(0, 120))
    port.add_quay(BulkQuay(1, 200))
    port.add_quay(ContainerQuay(2, 40))
    port.add_quay(ContainerQuay(3, 10))

    grain = BulkCargo(1, "Australia", 80, BulkCargoType.GRAIN, registry=registry)
    ore = BulkCargo(2, "China", 100, BulkCargoType.MINERALS, registry=registry)
    standard = Container(3, "New Zealand", ContainerType.STANDARD, registry=registry)
    reefer = Container(4, "New Zealand", ContainerType.REEFER, registry=registry)
    open_top = Container(5, "England", ContainerType.OPEN_TOP, registry=registry)
    oil = BulkCargo(6, "Brazil", 150, BulkCargoType.OIL, registry=registry)

    alpha = BulkCarrier(1234567, "Alpha", "Australia", NauticalFlag.HOTEL, 85, registry=registry)
    bravo = BulkCarrier(4567890, "Bravo", "China", NauticalFlag.NOVEMBER, 120, registry=registry)
    charlie = ContainerShip(9876543, "Charlie", "England", NauticalFlag.WHISKEY, 8,
                            registry=registry)
    delta = ContainerShip(7654321, "Delta", "New Zealand", NauticalFlag.NOVEMBER, 15,
                          registry=registry)
    echo = BulkCarrier(3456789, "Echo", "Brazil", NauticalFlag.BRAVO, 200, registry=registry)

    # Arriving ships already carry cargo bound for their home port
    delta.load_cargo(standard)
    delta.load_cargo(reefer)
    echo.load_cargo(oil)

    for movement in (
        ShipMovement(1, INBOUND, alpha),
        ShipMovement(2, INBOUND, delta),
        ShipMovement(3, INBOUND, charlie),
        ShipMovement(4, INBOUND, echo),
        ShipMovement(6, INBOUND, bravo),
        CargoMovement(12, INBOUND, [grain, ore, open_top]),
        CargoMovement(25, OUTBOUND, [standard]),
        ShipMovement(40, OUTBOUND, alpha),
        ShipMovement(45, OUTBOUND, charlie),
        ShipMovement(55, OUTBOUND, echo),
    ):
        port.schedule_movement(movement)

    for factory in EVALUATOR_TYPES.values():
        port.add_statistics_evaluator(factory(port))
    return port
