"""Tests for quay occupancy and identity."""

import pytest

from portsim.models.quay import BulkQuay, ContainerQuay


class TestQuay:
    def test_new_quay_is_empty(self):
        quay = BulkQuay(0, 120)
        assert quay.is_empty()
        assert quay.ship is None
        assert quay.capacity == 120

    def test_arrive_and_depart(self, carrier1):
        quay = BulkQuay(0, 120)
        quay.ship_arrives(carrier1)
        assert not quay.is_empty()
        assert quay.ship_departs() is carrier1
        assert quay.is_empty()

    def test_depart_from_empty_quay(self):
        assert ContainerQuay(1, 10).ship_departs() is None

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError, match="Quay ID"):
            BulkQuay(-1, 10)
        with pytest.raises(ValueError, match="maxContainers"):
            ContainerQuay(0, -10)

    def test_str(self, container_ship1):
        quay = ContainerQuay(3, 40)
        assert str(quay) == "ContainerQuay 3 [Ship: None] - 40"
        quay.ship_arrives(container_ship1)
        assert str(quay) == "ContainerQuay 3 [Ship: 9876543] - 40"


class TestQuayEquality:
    def test_same_fields_equal(self):
        assert BulkQuay(0, 120) == BulkQuay(0, 120)
        assert hash(BulkQuay(0, 120)) == hash(BulkQuay(0, 120))

    def test_kind_and_capacity_matter(self):
        assert BulkQuay(0, 10) != ContainerQuay(0, 10)
        assert BulkQuay(0, 10) != BulkQuay(0, 11)

    def test_docked_ship_matters(self, carrier1):
        occupied = BulkQuay(0, 120)
        occupied.ship_arrives(carrier1)
        assert occupied != BulkQuay(0, 120)
