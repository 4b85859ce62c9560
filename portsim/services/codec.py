"""
Text encodings for cargo, ships, quays, movements and the ship queue.

Every record is colon-delimited and starts with a type tag, e.g.

    BulkCargo:12:Australia:GRAIN:50
    Container:13:China:REEFER
    BulkCarrier:1234567:Alpha:Australia:HOTEL:85:12
    ContainerShip:7654321:Delta:China:NOVEMBER:15:2:13,14
    BulkQuay:0:1234567:120
    ContainerQuay:1:None:40
    ShipMovement:120:INBOUND:1234567
    CargoMovement:130:OUTBOUND:2:13,14
    ShipQueue:2:1234567,7654321

Decoders look every referenced identity up in the Registry and raise
BadEncodingError for anything malformed. ``encode_*(decode_*(s)) == s``
holds for every string the decoders accept.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TypeVar

from portsim.config.constants import (
    EMPTY_QUAY_MARKER,
    FIELD_SEPARATOR,
    LIST_SEPARATOR,
    SHIP_QUEUE_TAG,
    STORED_CARGO_TAG,
)
from portsim.models.cargo import BulkCargo, BulkCargoType, Cargo, Container, ContainerType
from portsim.models.movement import CargoMovement, Movement, MovementDirection, ShipMovement
from portsim.models.quay import BulkQuay, ContainerQuay, Quay
from portsim.models.ship import BulkCarrier, ContainerShip, NauticalFlag, Ship
from portsim.services.ship_queue import ShipQueue
from portsim.utils.exceptions import BadEncodingError
from portsim.utils.registry import Registry

# Canonical non-negative integers only: "0", "7", "120" (no signs, spaces or leading zeros)
_INT_PATTERN = re.compile(r"0|[1-9][0-9]*")

E = TypeVar("E", bound=Enum)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------
def split_fields(text: str, tag: str | None, count: int) -> list[str]:
    """Split a record, checking its tag and exact field count."""
    fields = text.split(FIELD_SEPARATOR)
    if len(fields) != count:
        raise BadEncodingError(f"Expected {count} fields, got {len(fields)}: {text!r}")
    if tag is not None and fields[0] != tag:
        raise BadEncodingError(f"Expected tag {tag!r}: {text!r}")
    return fields


def parse_int(value: str) -> int:
    if not _INT_PATTERN.fullmatch(value):
        raise BadEncodingError(f"Not a non-negative integer: {value!r}")
    return int(value)


def parse_enum(enum_cls: type[E], value: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise BadEncodingError(f"Unknown {enum_cls.__name__}: {value!r}") from None


def parse_id_list(value: str, expected: int) -> list[int]:
    """Parse ``id1,id2,...`` that must hold exactly ``expected`` ids."""
    if expected == 0:
        if value:
            raise BadEncodingError(f"Expected no ids, got {value!r}")
        return []
    ids = value.split(LIST_SEPARATOR)
    if len(ids) != expected:
        raise BadEncodingError(f"Declared {expected} ids, found {len(ids)}: {value!r}")
    return [parse_int(raw) for raw in ids]


def join_ids(ids) -> str:
    return LIST_SEPARATOR.join(str(i) for i in ids)


def _lookup(store, key: int):
    try:
        return store.get(key)
    except LookupError as e:
        raise BadEncodingError(str(e)) from e


def _build(factory, *args, **kwargs):
    """Run a constructor, reporting validation failures as bad encodings."""
    try:
        return factory(*args, **kwargs)
    except ValueError as e:
        raise BadEncodingError(str(e)) from e


# ---------------------------------------------------------------------------
# Cargo
# ---------------------------------------------------------------------------
def encode_cargo(cargo: Cargo) -> str:
    if isinstance(cargo, BulkCargo):
        return f"BulkCargo:{cargo.id}:{cargo.destination}:{cargo.type.value}:{cargo.tonnage}"
    if isinstance(cargo, Container):
        return f"Container:{cargo.id}:{cargo.destination}:{cargo.type.value}"
    raise TypeError(f"Unknown cargo kind: {type(cargo).__name__}")


def decode_cargo(text: str, registry: Registry) -> Cargo:
    tag = text.split(FIELD_SEPARATOR, 1)[0]
    if tag == "BulkCargo":
        _, cargo_id, destination, cargo_type, tonnage = split_fields(text, tag, 5)
        return _build(BulkCargo, parse_int(cargo_id), destination, parse_int(tonnage),
                      parse_enum(BulkCargoType, cargo_type), registry=registry)
    if tag == "Container":
        _, cargo_id, destination, container_type = split_fields(text, tag, 4)
        return _build(Container, parse_int(cargo_id), destination,
                      parse_enum(ContainerType, container_type), registry=registry)
    raise BadEncodingError(f"Unknown cargo type: {text!r}")


# ---------------------------------------------------------------------------
# Ships
# ---------------------------------------------------------------------------
def encode_ship(ship: Ship) -> str:
    base = (f"{type(ship).__name__}:{ship.imo_number}:{ship.name}:"
            f"{ship.origin_flag}:{ship.flag.value}:{ship.capacity}")
    if isinstance(ship, BulkCarrier):
        cargo_id = "" if ship.cargo is None else str(ship.cargo.id)
        return f"{base}:{cargo_id}"
    if isinstance(ship, ContainerShip):
        return f"{base}:{len(ship.containers)}:{join_ids(c.id for c in ship.containers)}"
    raise TypeError(f"Unknown ship kind: {type(ship).__name__}")


def _check_cargo_fits(ship_cls: type[Ship], origin: str, capacity: int, cargo: list[Cargo]):
    """Apply the ship's loading rules to encoded cargo before the ship exists."""
    if len({c.id for c in cargo}) != len(cargo):
        raise BadEncodingError(f"Duplicate cargo aboard {ship_cls.__name__}")
    if ship_cls is BulkCarrier:
        fits = len(cargo) <= 1 and all(
            isinstance(c, BulkCargo) and c.tonnage <= capacity for c in cargo)
    else:
        fits = len(cargo) <= capacity and all(isinstance(c, Container) for c in cargo)
    for item in cargo:
        if not fits or item.destination != origin:
            raise BadEncodingError(f"{ship_cls.__name__} from {origin} cannot carry {item}")


def decode_ship(text: str, registry: Registry) -> Ship:
    tag = text.split(FIELD_SEPARATOR, 1)[0]
    if tag == "BulkCarrier":
        _, imo, name, origin, flag, capacity, cargo_id = split_fields(text, tag, 7)
        cargo_ids = [parse_int(cargo_id)] if cargo_id else []
        ship_cls = BulkCarrier
    elif tag == "ContainerShip":
        _, imo, name, origin, flag, capacity, count, ids = split_fields(text, tag, 8)
        cargo_ids = parse_id_list(ids, parse_int(count))
        ship_cls = ContainerShip
    else:
        raise BadEncodingError(f"Unknown ship type: {text!r}")

    imo_number = parse_int(imo)
    nautical_flag = parse_enum(NauticalFlag, flag)
    ship_capacity = parse_int(capacity)
    # Construction registers the ship, so everything that can fail runs first
    cargo = [_lookup(registry.cargo, cargo_id) for cargo_id in cargo_ids]
    _check_cargo_fits(ship_cls, origin, ship_capacity, cargo)
    ship = _build(ship_cls, imo_number, name, origin, nautical_flag, ship_capacity,
                  registry=registry)
    for item in cargo:
        ship.load_cargo(item)
    return ship


# ---------------------------------------------------------------------------
# Quays
# ---------------------------------------------------------------------------
def encode_quay(quay: Quay) -> str:
    if not isinstance(quay, (BulkQuay, ContainerQuay)):
        raise TypeError(f"Unknown quay kind: {type(quay).__name__}")
    docked = EMPTY_QUAY_MARKER if quay.ship is None else str(quay.ship.imo_number)
    return f"{type(quay).__name__}:{quay.id}:{docked}:{quay.capacity}"


def decode_quay(text: str, registry: Registry) -> Quay:
    tag, quay_id, docked, capacity = split_fields(text, None, 4)
    if tag == "BulkQuay":
        quay_cls = BulkQuay
    elif tag == "ContainerQuay":
        quay_cls = ContainerQuay
    else:
        raise BadEncodingError(f"Unknown quay type: {text!r}")

    quay = _build(quay_cls, parse_int(quay_id), parse_int(capacity))
    if docked != EMPTY_QUAY_MARKER:
        ship = _lookup(registry.ships, parse_int(docked))
        if not ship.can_dock(quay):
            raise BadEncodingError(f"{ship} cannot be docked at {quay}")
        quay.ship_arrives(ship)
    return quay


# ---------------------------------------------------------------------------
# Movements
# ---------------------------------------------------------------------------
def encode_movement(movement: Movement) -> str:
    if isinstance(movement, ShipMovement):
        return (f"ShipMovement:{movement.time}:{movement.direction.value}:"
                f"{movement.ship.imo_number}")
    if isinstance(movement, CargoMovement):
        return (f"CargoMovement:{movement.time}:{movement.direction.value}:"
                f"{len(movement.cargo)}:{join_ids(c.id for c in movement.cargo)}")
    raise TypeError(f"Unknown movement kind: {type(movement).__name__}")


def decode_movement(text: str, registry: Registry) -> Movement:
    tag = text.split(FIELD_SEPARATOR, 1)[0]
    if tag == "ShipMovement":
        _, time, direction, imo = split_fields(text, tag, 4)
        ship = _lookup(registry.ships, parse_int(imo))
        return ShipMovement(parse_int(time), parse_enum(MovementDirection, direction), ship)
    if tag == "CargoMovement":
        _, time, direction, count, ids = split_fields(text, tag, 5)
        cargo_ids = parse_id_list(ids, parse_int(count))
        cargo = [_lookup(registry.cargo, cargo_id) for cargo_id in cargo_ids]
        return _build(CargoMovement, parse_int(time),
                      parse_enum(MovementDirection, direction), cargo)
    raise BadEncodingError(f"Unknown movement type: {text!r}")


# ---------------------------------------------------------------------------
# Ship queue and warehouse
# ---------------------------------------------------------------------------
def encode_ship_queue(queue: ShipQueue) -> str:
    ships = queue.ships
    return f"{SHIP_QUEUE_TAG}:{len(ships)}:{join_ids(s.imo_number for s in ships)}"


def decode_ship_queue(text: str, registry: Registry) -> ShipQueue:
    _, count, ids = split_fields(text, SHIP_QUEUE_TAG, 3)
    return ShipQueue([_lookup(registry.ships, imo) for imo in parse_id_list(ids, parse_int(count))])


def encode_stored_cargo(cargo: list[Cargo]) -> str:
    return f"{STORED_CARGO_TAG}:{len(cargo)}:{join_ids(c.id for c in cargo)}"


def decode_stored_cargo(text: str, registry: Registry) -> list[Cargo]:
    _, count, ids = split_fields(text, STORED_CARGO_TAG, 3)
    return [_lookup(registry.cargo, cargo_id) for cargo_id in parse_id_list(ids, parse_int(count))]
