"""Tests for the built-in demo port."""

import pytest

from portsim.data_collection.demo_data import DEMO_PORT_NAME, build_demo_port
from portsim.models.quay import BulkQuay, ContainerQuay
from portsim.services.evaluators import EVALUATOR_TYPES


class TestDemoPort:
    def test_name_and_time(self, registry):
        port = build_demo_port(registry)
        assert port.name == DEMO_PORT_NAME
        assert port.time == 0

    def test_quays(self, registry):
        port = build_demo_port(registry)
        kinds = [type(q) for q in port.quays]
        assert kinds == [BulkQuay, BulkQuay, ContainerQuay, ContainerQuay]
        assert all(q.is_empty() for q in port.quays)

    def test_entities_registered(self, registry):
        build_demo_port(registry)
        assert len(registry.ships) == 5
        assert len(registry.cargo) == 6

    def test_arriving_ships_carry_cargo(self, registry):
        build_demo_port(registry)
        assert [c.id for c in registry.ships.get(7654321).cargo_aboard()] == [3, 4]
        assert registry.ships.get(3456789).cargo.id == 6

    def test_movements_scheduled(self, registry):
        port = build_demo_port(registry)
        times = [m.time for m in port.movements]
        assert len(times) == 10
        assert times == sorted(times)

    def test_all_evaluators_registered(self, registry):
        port = build_demo_port(registry)
        assert [e.name for e in port.evaluators] == list(EVALUATOR_TYPES)

    def test_needs_fresh_registry(self, registry):
        build_demo_port(registry)
        with pytest.raises(ValueError, match="unique"):
            build_demo_port(registry)
