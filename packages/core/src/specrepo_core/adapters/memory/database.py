"""InMemoryDatabase: dict-backed store shared by in-memory units of work."""

from __future__ import annotations

import copy
from typing import Any, TypeVar

T = TypeVar("T")


class InMemoryDatabase:
    """Backing store for :class:`InMemoryUnitOfWork`.

    Holds one table per entity type, keyed by the primary-key attribute
    (``id`` by default). Rows are deep copies: the store never shares a
    reference with any session, and every load hands out a fresh copy.
    Integer ids are assigned from a per-type sequence when an inserted entity
    has none. Like a database sequence, it never moves backwards.
    """

    def __init__(self, id_attribute: str = "id") -> None:
        self.id_attribute = id_attribute
        self._tables: dict[type[Any], dict[Any, Any]] = {}
        self._sequences: dict[type[Any], int] = {}

    def identity_of(self, entity: Any) -> Any:
        return getattr(entity, self.id_attribute, None)

    def assign_id(self, entity: Any) -> Any:
        """Give *entity* the next sequence id unless it already has one."""
        entity_cls = type(entity)
        entity_id = self.identity_of(entity)
        current = self._sequences.get(entity_cls, 0)
        if entity_id is None:
            entity_id = current + 1
            setattr(entity, self.id_attribute, entity_id)
        if isinstance(entity_id, int) and entity_id > current:
            self._sequences[entity_cls] = entity_id
        return entity_id

    # -- rows ---------------------------------------------------------------

    def contains(self, entity_cls: type[Any], entity_id: Any) -> bool:
        return entity_id in self._tables.get(entity_cls, {})

    def load(self, entity_cls: type[T], entity_id: Any) -> T | None:
        row = self._tables.get(entity_cls, {}).get(entity_id)
        return copy.deepcopy(row) if row is not None else None

    def load_all(self, entity_cls: type[T]) -> list[T]:
        """Return copies of every row, in insertion order."""
        return [copy.deepcopy(row) for row in self._tables.get(entity_cls, {}).values()]

    def save(self, entity: Any) -> None:
        table = self._tables.setdefault(type(entity), {})
        table[self.identity_of(entity)] = copy.deepcopy(entity)

    def remove(self, entity_cls: type[Any], entity_id: Any) -> None:
        self._tables.get(entity_cls, {}).pop(entity_id, None)

    def count(self, entity_cls: type[Any] | None = None) -> int:
        if entity_cls is not None:
            return len(self._tables.get(entity_cls, {}))
        return sum(len(table) for table in self._tables.values())

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._tables.clear()
        self._sequences.clear()

    def __len__(self) -> int:
        return self.count()
