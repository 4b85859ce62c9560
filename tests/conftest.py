"""Shared fixtures: a fresh identity registry and a few standard ships."""

import pytest

from portsim.models.ship import BulkCarrier, ContainerShip, NauticalFlag
from portsim.utils.registry import Registry


@pytest.fixture
def registry():
    registry = Registry()
    yield registry
    registry.reset()


@pytest.fixture
def carrier1(registry):
    return BulkCarrier(1234567, "Alpha", "Australia", NauticalFlag.HOTEL, 85, registry=registry)


@pytest.fixture
def carrier2(registry):
    return BulkCarrier(4567890, "Bravo", "China", NauticalFlag.NOVEMBER, 120, registry=registry)


@pytest.fixture
def container_ship1(registry):
    return ContainerShip(9876543, "Charlie", "England", NauticalFlag.WHISKEY, 8, registry=registry)


@pytest.fixture
def container_ship2(registry):
    return ContainerShip(7654321, "Delta", "New Zealand", NauticalFlag.NOVEMBER, 15,
                         registry=registry)
