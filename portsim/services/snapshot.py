"""
Whole-port snapshots.

Layout (one record per line):

    <name>
    <time>
    <numCargo>
    <EncodedCargo> x numCargo        every registered cargo, ascending id
    <numShips>
    <EncodedShip> x numShips         every registered ship, ascending IMO
    <numQuays>
    <EncodedQuay> x numQuays         in port order
    ShipQueue:<n>:<imo1,...>
    StoredCargo:<n>:<id1,...>
    Movements:<n>
    <EncodedMovement> x n            in execution order
    Evaluators:<n>:<Name1,...>

Decoding is all-or-nothing: on any error the registry is reset and a
single BadEncodingError is raised.
"""

from __future__ import annotations

from typing import Iterator

from portsim.config.constants import EVALUATORS_TAG, LIST_SEPARATOR, MOVEMENTS_TAG
from portsim.services import codec
from portsim.services.evaluators import EVALUATOR_TYPES
from portsim.services.port import Port
from portsim.utils.exceptions import BadEncodingError
from portsim.utils.logger import get_logger
from portsim.utils.registry import Registry

logger = get_logger(__name__)


def encode_port(port: Port) -> str:
    cargo = port.registry.cargo.values()
    ships = port.registry.ships.values()
    quays = port.quays
    movements = port.movements
    evaluator_names = [evaluator.name for evaluator in port.evaluators]

    lines = [port.name, str(port.time)]
    lines.append(str(len(cargo)))
    lines.extend(codec.encode_cargo(c) for c in cargo)
    lines.append(str(len(ships)))
    lines.extend(codec.encode_ship(s) for s in ships)
    lines.append(str(len(quays)))
    lines.extend(codec.encode_quay(q) for q in quays)
    lines.append(codec.encode_ship_queue(port.ship_queue))
    lines.append(codec.encode_stored_cargo(port.stored_cargo))
    lines.append(f"{MOVEMENTS_TAG}:{len(movements)}")
    lines.extend(codec.encode_movement(m) for m in movements)
    lines.append(f"{EVALUATORS_TAG}:{len(evaluator_names)}:{LIST_SEPARATOR.join(evaluator_names)}")
    return "\n".join(lines)


class _Lines:
    """Line cursor that treats running out of input as a bad encoding."""

    def __init__(self, text: str):
        self._lines: Iterator[str] = iter(text.split("\n"))
        self.number = 0

    def next(self) -> str:
        try:
            line = next(self._lines)
        except StopIteration:
            raise BadEncodingError(f"Snapshot ended early after line {self.number}") from None
        self.number += 1
        return line

    def count(self) -> int:
        return codec.parse_int(self.next())

    def assert_exhausted(self):
        if next(self._lines, None) is not None:
            raise BadEncodingError(f"Unexpected content after line {self.number}")


def _decode(text: str, registry: Registry) -> Port:
    lines = _Lines(text)
    name = lines.next()
    time = lines.count()

    for _ in range(lines.count()):
        codec.decode_cargo(lines.next(), registry)
    for _ in range(lines.count()):
        codec.decode_ship(lines.next(), registry)
    quays = [codec.decode_quay(lines.next(), registry) for _ in range(lines.count())]

    queue = codec.decode_ship_queue(lines.next(), registry)
    stored = codec.decode_stored_cargo(lines.next(), registry)

    _, count = codec.split_fields(lines.next(), MOVEMENTS_TAG, 2)
    movements = [codec.decode_movement(lines.next(), registry)
                 for _ in range(codec.parse_int(count))]

    _, count, names = codec.split_fields(lines.next(), EVALUATORS_TAG, 3)
    expected = codec.parse_int(count)
    evaluator_names = names.split(LIST_SEPARATOR) if expected else []
    if expected == 0 and names:
        raise BadEncodingError(f"Expected no evaluators, got {names!r}")
    if len(evaluator_names) != expected:
        raise BadEncodingError(f"Declared {expected} evaluators, found {len(evaluator_names)}")
    if len(set(evaluator_names)) != len(evaluator_names):
        raise BadEncodingError(f"Duplicate evaluators: {names!r}")
    lines.assert_exhausted()

    try:
        port = Port(name, time, queue, quays, stored, registry=registry)
        for movement in movements:
            port.schedule_movement(movement)
    except ValueError as e:
        raise BadEncodingError(str(e)) from e

    for evaluator_name in evaluator_names:
        factory = EVALUATOR_TYPES.get(evaluator_name)
        if factory is None:
            raise BadEncodingError(f"Unknown evaluator: {evaluator_name!r}")
        port.add_statistics_evaluator(factory(port))
    return port


def decode_port(text: str, registry: Registry) -> Port:
    """
    Rebuild a port from its snapshot text.

    Args:
        text: Snapshot text; one trailing newline is tolerated
        registry: Empty registry that receives the decoded ships and cargo

    Returns:
        The decoded Port

    Raises:
        BadEncodingError: the snapshot is malformed (registry is reset)
        ValueError: the registry already holds ships or cargo
    """
    if len(registry.ships) or len(registry.cargo):
        raise ValueError(f"decode_port needs an empty registry, got {registry!r}")
    if text.endswith("\n"):
        text = text[:-1]

    try:
        port = _decode(text, registry)
    except BadEncodingError:
        registry.reset()
        raise

    logger.info("Decoded port %s at t=%d (%d quays, %d ships, %d cargo)",
                port.name, port.time, len(port.quays), len(registry.ships), len(registry.cargo))
    return port
