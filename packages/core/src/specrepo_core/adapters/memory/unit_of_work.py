"""InMemoryUnitOfWork: session semantics over an :class:`InMemoryDatabase`."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, TypeVar

from ...config import UnitOfWorkSettings
from ...ports.transaction import Transaction
from ...ports.unit_of_work import UnitOfWork
from ...primitives.exceptions import UnitOfWorkError
from .database import InMemoryDatabase
from .queryable import EnumerableQueryable

logger = logging.getLogger("specrepo.uow")

T = TypeVar("T")

# Undo-log marker for a row that did not exist before the transaction wrote it.
_ABSENT = object()


class InMemoryUnitOfWork(UnitOfWork):
    """In-memory implementation of UnitOfWork.

    Mirrors ORM session behaviour closely enough to run the same repository
    tests against it:

    - an identity map, so one session always hands out the same instance for
      a given id, and two sessions never share one;
    - pending inserts and deletes, written on :meth:`flush`;
    - entities loaded or attached via :meth:`update` are written back on
      every flush, so in-place changes are picked up automatically;
    - ``get_by_id`` sees pending inserts that already carry an id, while
      ``get_all`` and ``query`` see them only when ``autoflush`` is on;
    - inserting an id that is already stored fails the flush, as a primary
      key constraint would.

    While an explicit transaction is open, every row the flush writes or
    removes is recorded with its prior state, so a rollback restores exactly
    those rows and leaves other sessions' work alone.
    """

    def __init__(
        self,
        database: InMemoryDatabase,
        *,
        autoflush: bool = False,
        flush_on_error: bool = True,
    ) -> None:
        super().__init__(flush_on_error=flush_on_error)
        self.database = database
        self.autoflush = autoflush
        self._identity_map: dict[tuple[type[Any], Any], Any] = {}
        self._new: list[Any] = []
        self._deleted: dict[tuple[type[Any], Any], Any] = {}
        self._undo_log: dict[tuple[type[Any], Any], Any] | None = None

    def _key(self, entity: Any) -> tuple[type[Any], Any]:
        return type(entity), self.database.identity_of(entity)

    # -- entity operations ---------------------------------------------------

    def insert(self, entity: Any) -> None:
        self._ensure_open()
        if not any(pending is entity for pending in self._new):
            self._new.append(entity)
        logger.debug("Staged insert of %s", type(entity).__name__)

    def update(self, entity: Any) -> None:
        self._ensure_open()
        key = self._key(entity)
        if key[1] is None:
            raise UnitOfWorkError(
                f"Cannot update a {key[0].__name__} without an identity; insert it first"
            )
        attached = self._identity_map.get(key)
        if attached is not None and attached is not entity:
            raise UnitOfWorkError(
                f"A different {key[0].__name__} instance with id={key[1]!r} "
                "is already attached to this unit of work"
            )
        self._identity_map[key] = entity
        self._deleted.pop(key, None)

    def delete(self, entity: Any) -> None:
        self._ensure_open()
        for index, pending in enumerate(self._new):
            if pending is entity:
                del self._new[index]
                return
        key = self._key(entity)
        if key[1] is None:
            raise UnitOfWorkError(
                f"Cannot delete a {key[0].__name__} that was never persisted"
            )
        self._identity_map.pop(key, None)
        self._deleted[key] = entity
        logger.debug("Staged delete of %s id=%r", key[0].__name__, key[1])

    def get_by_id(self, entity_cls: type[T], entity_id: Any) -> T | None:
        self._ensure_open()
        key = (entity_cls, entity_id)
        if key in self._deleted:
            return None
        if key in self._identity_map:
            return self._identity_map[key]  # type: ignore[no-any-return]
        for pending in self._new:
            if type(pending) is entity_cls and self.database.identity_of(pending) == entity_id:
                return pending  # type: ignore[no-any-return]
        loaded = self.database.load(entity_cls, entity_id)
        if loaded is not None:
            self._identity_map[key] = loaded
        return loaded

    def get_all(self, entity_cls: type[T]) -> list[T]:
        return self._rows(entity_cls)

    def query(self, entity_cls: type[T]) -> EnumerableQueryable[T]:
        return EnumerableQueryable(partial(self._rows, entity_cls))

    def _rows(self, entity_cls: type[T]) -> list[T]:
        self._ensure_open()
        if self.autoflush:
            self.flush()
        rows: list[T] = []
        for loaded in self.database.load_all(entity_cls):
            key = (entity_cls, self.database.identity_of(loaded))
            if key in self._deleted:
                continue
            rows.append(self._identity_map.setdefault(key, loaded))
        return rows

    # -- synchronisation -----------------------------------------------------

    def flush(self) -> None:
        self._ensure_open()
        for entity in self._new:
            self.database.assign_id(entity)
        self._check_new_identities()

        for key in self._deleted:
            self._remember(key)
            self.database.remove(*key)
        inserted = len(self._new)
        for entity in self._new:
            key = self._key(entity)
            self._remember(key)
            self.database.save(entity)
            self._identity_map[key] = entity
        for key, entity in self._identity_map.items():
            if self.database.contains(*key):
                self._remember(key)
                self.database.save(entity)
        logger.debug(
            "Flushed %d insert(s), %d delete(s)", inserted, len(self._deleted)
        )
        self._new.clear()
        self._deleted.clear()

    def _check_new_identities(self) -> None:
        """Reject pending inserts whose id is already taken, before any write."""
        seen: set[tuple[type[Any], Any]] = set()
        for entity in self._new:
            key = self._key(entity)
            taken = key in seen or (
                key not in self._deleted and self.database.contains(*key)
            )
            if taken:
                raise UnitOfWorkError(
                    f"Cannot insert {key[0].__name__} with id={key[1]!r}: "
                    "an entity with that identity already exists"
                )
            seen.add(key)

    def commit(self) -> None:
        self.flush()

    def rollback(self) -> None:
        self._ensure_open()
        self._discard()

    def _discard(self) -> None:
        self._new.clear()
        self._deleted.clear()
        self._identity_map.clear()

    # -- undo log ------------------------------------------------------------

    def _remember(self, key: tuple[type[Any], Any]) -> None:
        if self._undo_log is None or key in self._undo_log:
            return
        before = self.database.load(*key)
        self._undo_log[key] = before if before is not None else _ABSENT

    def _start_undo_log(self) -> None:
        self._undo_log = {}

    def _forget_undo_log(self) -> None:
        self._undo_log = None

    def _undo(self) -> None:
        log = self._undo_log or {}
        self._undo_log = None
        for (entity_cls, entity_id), before in log.items():
            if before is _ABSENT:
                self.database.remove(entity_cls, entity_id)
            else:
                self.database.save(before)
        logger.debug("Restored %d row(s) written inside the transaction", len(log))

    def _begin_transaction(self) -> InMemoryTransaction:
        return InMemoryTransaction(self)

    def _release(self) -> None:
        self._discard()
        self._forget_undo_log()


class InMemoryTransaction(Transaction):
    """Undo-log transaction.

    Commit flushes the unit of work and drops the log. Rollback discards the
    unit of work's pending changes and puts back the prior state of every row
    it wrote or removed since the transaction began. Rows written by other
    units of work are left as they are.
    """

    def __init__(self, unit_of_work: InMemoryUnitOfWork) -> None:
        super().__init__()
        self._unit_of_work = unit_of_work
        unit_of_work._start_undo_log()

    def _commit(self) -> None:
        self._unit_of_work.flush()
        self._unit_of_work._forget_undo_log()

    def _rollback(self) -> None:
        self._unit_of_work.rollback()
        self._unit_of_work._undo()


class InMemoryUnitOfWorkFactory:
    """Creates in-memory units of work that share one database."""

    def __init__(
        self,
        database: InMemoryDatabase | None = None,
        settings: UnitOfWorkSettings | None = None,
    ) -> None:
        self.database = database if database is not None else InMemoryDatabase()
        self.settings = settings or UnitOfWorkSettings()

    def begin_unit_of_work(self) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(
            self.database,
            autoflush=self.settings.autoflush,
            flush_on_error=self.settings.flush_on_error,
        )
