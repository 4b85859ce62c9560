"""Tests for the port tick engine."""

import pytest

from portsim.models.cargo import BulkCargo, BulkCargoType, Container, ContainerType
from portsim.models.movement import CargoMovement, MovementDirection, ShipMovement
from portsim.models.quay import BulkQuay, ContainerQuay
from portsim.models.ship import BulkCarrier, ContainerShip, NauticalFlag
from portsim.services.evaluators import ShipFlagEvaluator, ShipThroughputEvaluator
from portsim.services.port import Port
from portsim.services.ship_queue import ShipQueue

INBOUND = MovementDirection.INBOUND
OUTBOUND = MovementDirection.OUTBOUND


def _tick(port, minutes):
    for _ in range(minutes):
        port.elapse_one_minute()


class TestPortConstruction:
    def test_defaults(self, registry):
        port = Port("Brisbane", registry=registry)
        assert port.name == "Brisbane"
        assert port.time == 0
        assert port.quays == []
        assert port.stored_cargo == []
        assert port.movements == []
        assert port.evaluators == []
        assert len(port.ship_queue) == 0

    def test_negative_time_rejected(self, registry):
        with pytest.raises(ValueError, match="Time"):
            Port("Brisbane", -1, registry=registry)

    def test_name_with_newline_rejected(self, registry):
        with pytest.raises(ValueError):
            Port("Bris\nbane", registry=registry)

    def test_views_are_copies(self, registry):
        port = Port("Brisbane", registry=registry)
        port.add_quay(BulkQuay(0, 10))
        port.quays.clear()
        assert len(port.quays) == 1


class TestTick:
    def test_time_advances_by_one(self, registry):
        port = Port("Brisbane", 7, registry=registry)
        port.elapse_one_minute()
        assert port.time == 8

    def test_docking_only_every_ten_minutes(self, registry, carrier1):
        port = Port("Brisbane", registry=registry)
        quay = BulkQuay(0, 120)
        port.add_quay(quay)
        port.ship_queue.add(carrier1)
        _tick(port, 9)
        assert quay.is_empty()
        port.elapse_one_minute()
        assert quay.ship is carrier1
        assert len(port.ship_queue) == 0

    def test_one_ship_per_quay_per_tick(self, registry, carrier1, carrier2):
        port = Port("Brisbane", 9, ShipQueue([carrier1, carrier2]), [BulkQuay(0, 120)],
                    registry=registry)
        port.elapse_one_minute()
        assert port.quays[0].ship is carrier1
        assert port.ship_queue.ships == [carrier2]

    def test_several_quays_fill_in_one_tick(self, registry, carrier1, carrier2):
        quays = [BulkQuay(0, 120), BulkQuay(1, 120)]
        port = Port("Brisbane", 9, ShipQueue([carrier2, carrier1]), quays, registry=registry)
        port.elapse_one_minute()
        # carrier1 flies HOTEL so it takes the first quay
        assert quays[0].ship is carrier1
        assert quays[1].ship is carrier2

    def test_head_that_does_not_fit_waits(self, registry, carrier1):
        port = Port("Brisbane", 9, ShipQueue([carrier1]), [ContainerQuay(0, 10)],
                    registry=registry)
        port.elapse_one_minute()
        assert port.quays[0].is_empty()
        assert port.ship_queue.ships == [carrier1]

    def test_head_may_fit_a_later_quay(self, registry):
        heavy = BulkCarrier(2222222, "Heavy", "Chile", NauticalFlag.NOVEMBER, 300,
                            registry=registry)
        heavy.load_cargo(BulkCargo(1, "Chile", 150, BulkCargoType.OIL, registry=registry))
        quays = [BulkQuay(0, 100), BulkQuay(1, 200)]
        port = Port("Brisbane", 9, ShipQueue([heavy]), quays, registry=registry)
        port.elapse_one_minute()
        assert quays[0].is_empty()
        assert quays[1].ship is heavy

    def test_unloading_every_five_minutes(self, registry, container_ship1):
        containers = [Container(i, "England", ContainerType.STANDARD, registry=registry)
                      for i in range(2)]
        for container in containers:
            container_ship1.load_cargo(container)
        quay = ContainerQuay(0, 10)
        quay.ship_arrives(container_ship1)
        port = Port("Brisbane", quays=[quay], registry=registry)
        _tick(port, 4)
        assert port.stored_cargo == []
        port.elapse_one_minute()
        assert port.stored_cargo == containers
        assert container_ship1.containers == []

    def test_docked_ship_unloads_same_tick(self, registry, container_ship2):
        container = Container(1, "New Zealand", ContainerType.REEFER, registry=registry)
        container_ship2.load_cargo(container)
        port = Port("Brisbane", 9, ShipQueue([container_ship2]), [ContainerQuay(0, 10)],
                    registry=registry)
        port.elapse_one_minute()
        assert port.stored_cargo == [container]


class TestMovements:
    def test_movement_runs_at_its_time(self, registry, carrier1):
        port = Port("Brisbane", registry=registry)
        port.schedule_movement(ShipMovement(3, INBOUND, carrier1))
        _tick(port, 2)
        assert len(port.ship_queue) == 0
        port.elapse_one_minute()
        assert port.ship_queue.ships == [carrier1]
        assert port.movements == []

    def test_movement_runs_once(self, registry, carrier1):
        port = Port("Brisbane", registry=registry)
        port.schedule_movement(ShipMovement(1, INBOUND, carrier1))
        _tick(port, 5)
        assert port.ship_queue.ships == [carrier1]

    def test_same_time_runs_in_schedule_order(self, registry, carrier1, carrier2):
        port = Port("Brisbane", registry=registry)
        port.schedule_movement(ShipMovement(2, INBOUND, carrier2))
        port.schedule_movement(ShipMovement(2, INBOUND, carrier1))
        _tick(port, 2)
        assert port.ship_queue.ships == [carrier2, carrier1]

    def test_pending_movements_in_execution_order(self, registry, carrier1, carrier2):
        port = Port("Brisbane", registry=registry)
        late = ShipMovement(9, INBOUND, carrier1)
        early = ShipMovement(4, INBOUND, carrier2)
        port.schedule_movement(late)
        port.schedule_movement(early)
        assert port.movements == [early, late]

    def test_past_movement_rejected(self, registry, carrier1):
        port = Port("Brisbane", 10, registry=registry)
        with pytest.raises(ValueError, match="should have already occurred"):
            port.schedule_movement(ShipMovement(9, INBOUND, carrier1))

    def test_movement_at_current_time_runs_next_tick(self, registry, carrier1):
        port = Port("Brisbane", 10, registry=registry)
        port.add_movement(ShipMovement(10, INBOUND, carrier1))
        assert len(port.ship_queue) == 0
        port.elapse_one_minute()
        assert port.ship_queue.ships == [carrier1]

    def test_cargo_inbound_and_outbound(self, registry):
        cargo = [Container(i, "Chile", ContainerType.STANDARD, registry=registry)
                 for i in range(3)]
        port = Port("Brisbane", registry=registry)
        port.schedule_movement(CargoMovement(1, INBOUND, cargo))
        port.schedule_movement(CargoMovement(2, OUTBOUND, [cargo[1]]))
        _tick(port, 1)
        assert port.stored_cargo == cargo
        _tick(port, 1)
        assert port.stored_cargo == [cargo[0], cargo[2]]

    def test_unknown_movement_kind(self, registry):
        port = Port("Brisbane", registry=registry)
        with pytest.raises(TypeError):
            port.process_movement("not a movement")


class TestDeparture:
    def test_departing_ship_loads_and_leaves_quay(self, registry, carrier1):
        grain = BulkCargo(1, "Australia", 80, BulkCargoType.GRAIN, registry=registry)
        coal = BulkCargo(2, "China", 10, BulkCargoType.COAL, registry=registry)
        quay = BulkQuay(0, 120)
        quay.ship_arrives(carrier1)
        port = Port("Brisbane", quays=[quay], stored_cargo=[coal, grain], registry=registry)
        port.process_movement(ShipMovement(0, OUTBOUND, carrier1))
        assert carrier1.cargo is grain
        assert port.stored_cargo == [coal]
        assert quay.is_empty()

    def test_container_ship_respects_capacity(self, registry):
        ship = ContainerShip(2345678, "Small", "Chile", NauticalFlag.NOVEMBER, 2,
                             registry=registry)
        stored = [Container(i, "Chile", ContainerType.STANDARD, registry=registry)
                  for i in range(3)]
        port = Port("Brisbane", stored_cargo=stored, registry=registry)
        port.process_movement(ShipMovement(0, OUTBOUND, ship))
        assert ship.containers == stored[:2]
        assert port.stored_cargo == [stored[2]]

    def test_departure_leaves_other_quays_alone(self, registry, carrier1, carrier2):
        quays = [BulkQuay(0, 120), BulkQuay(1, 120)]
        quays[0].ship_arrives(carrier1)
        quays[1].ship_arrives(carrier2)
        port = Port("Brisbane", quays=quays, registry=registry)
        port.process_movement(ShipMovement(0, OUTBOUND, carrier2))
        assert quays[0].ship is carrier1
        assert quays[1].is_empty()


class TestEvaluatorRegistration:
    def test_one_evaluator_per_class(self, registry):
        port = Port("Brisbane", registry=registry)
        first = ShipFlagEvaluator()
        port.add_statistics_evaluator(first)
        port.register_evaluator(ShipFlagEvaluator())
        port.add_statistics_evaluator(ShipThroughputEvaluator())
        assert len(port.evaluators) == 2
        assert port.evaluators[0] is first

    def test_evaluators_see_movements_and_minutes(self, registry, carrier1):
        port = Port("Brisbane", registry=registry)
        flags = ShipFlagEvaluator()
        port.add_statistics_evaluator(flags)
        port.schedule_movement(ShipMovement(2, INBOUND, carrier1))
        _tick(port, 3)
        assert flags.time == 3
        assert flags.flag_statistics("Australia") == 1


class TestPortScenario:
    def test_queue_dock_unload_depart(self, registry):
        """Two ships arrive, dock at minute 10, and one later leaves with cargo."""
        ore = BulkCargo(1, "Chile", 50, BulkCargoType.MINERALS, registry=registry)
        reefer = Container(2, "Peru", ContainerType.REEFER, registry=registry)
        bulk = BulkCarrier(1111111, "Ore Star", "Chile", NauticalFlag.NOVEMBER, 60,
                           registry=registry)
        boxes = ContainerShip(2222222, "Box One", "Peru", NauticalFlag.NOVEMBER, 4,
                              registry=registry)
        boxes.load_cargo(reefer)

        port = Port("Valparaiso", quays=[ContainerQuay(0, 5), BulkQuay(1, 100)],
                    registry=registry)
        port.schedule_movement(ShipMovement(1, INBOUND, bulk))
        port.schedule_movement(ShipMovement(2, INBOUND, boxes))
        port.schedule_movement(CargoMovement(12, INBOUND, [ore]))
        port.schedule_movement(ShipMovement(20, OUTBOUND, bulk))

        _tick(port, 10)
        # The container ship goes first; the bulk carrier takes the next quay
        assert port.quays[0].ship is boxes
        assert port.quays[1].ship is bulk
        assert port.stored_cargo == [reefer]

        _tick(port, 10)
        assert bulk.cargo is ore
        assert port.quays[1].is_empty()
        assert port.stored_cargo == [reefer]
        assert port.time == 20

    def test_cargo_arrives_while_carrier_docks(self, registry):
        carrier = BulkCarrier(1234567, "Alpha", "Australia", NauticalFlag.NOVEMBER, 80,
                              registry=registry)
        grain = BulkCargo(1, "Australia", 50, BulkCargoType.GRAIN, registry=registry)
        port = Port("Brisbane", quays=[BulkQuay(0, 100)], registry=registry)
        port.schedule_movement(ShipMovement(0, INBOUND, carrier))
        port.schedule_movement(CargoMovement(10, INBOUND, [grain]))
        _tick(port, 9)
        assert port.stored_cargo == []
        port.elapse_one_minute()
        assert port.stored_cargo == [grain]
        assert port.quays[0].ship is carrier
        assert carrier.cargo is None
