"""
In-memory identity stores for ships and cargo.

Every ship and cargo unit registers itself on construction so that
snapshots and movements can refer to them by key. A Registry is passed
explicitly to constructors; tests create a fresh one per case.
"""

from __future__ import annotations

from typing import Any

from portsim.utils.exceptions import NoSuchCargoError, NoSuchShipError


class IdentityStore:
    """Unique-key store. Lookups of missing keys raise ``missing_error``."""

    def __init__(self, kind: str, missing_error: type[LookupError]):
        self.kind = kind
        self._missing_error = missing_error
        self._store: dict[int, Any] = {}

    def exists(self, key: int) -> bool:
        return key in self._store

    def get(self, key: int):
        """Return the entity registered under ``key``."""
        try:
            return self._store[key]
        except KeyError:
            raise self._missing_error(f"No {self.kind} exists with key: {key}") from None

    def register(self, key: int, entity):
        """Store a new entity. Keys are never reused."""
        if key in self._store:
            raise ValueError(f"The key of the {self.kind} must be unique: {key}")
        self._store[key] = entity

    def values(self) -> list:
        """All entities in ascending key order."""
        return [self._store[k] for k in sorted(self._store)]

    def reset(self):
        """Forget every registered entity."""
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key) -> bool:
        return key in self._store


class Registry:
    """The ship and cargo stores for one simulation."""

    def __init__(self):
        self.ships = IdentityStore("ship", NoSuchShipError)
        self.cargo = IdentityStore("cargo", NoSuchCargoError)

    def reset(self):
        self.ships.reset()
        self.cargo.reset()

    def __repr__(self) -> str:
        return f"Registry(ships={len(self.ships)}, cargo={len(self.cargo)})"
