"""UnitOfWork: Abstract base class for the Unit of Work pattern."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

from ..primitives.exceptions import TransactionError, UnitOfWorkClosedError

if TYPE_CHECKING:
    from types import TracebackType

    from .queryable import IQueryable
    from .transaction import Transaction

logger = logging.getLogger("specrepo.uow")

T = TypeVar("T")


class UnitOfWork(ABC):
    """
    Abstract base class for Unit of Work implementations.

    A unit of work is one persistence conversation. It stages inserts,
    updates and deletes, decides when they are flushed to the backing store,
    and owns the transaction boundary. Repositories only forward to it.

    Leaving the ``with`` block *flushes on dispose*:

    1. A transaction begun with :meth:`begin_transaction` and never finished
       is rolled back, so its work is lost.
    2. Remaining staged changes are committed when the block completes. They
       are also committed after an exception unless ``flush_on_error`` is
       ``False``, in which case they are rolled back.
    3. :meth:`close` always runs last.

    Example:
        ```python
        with factory.begin_unit_of_work() as uow:
            repo = CustomerRepository(uow, locator)
            repo.insert(customer)
        # customer is durable here
        ```
    """

    def __init__(self, *, flush_on_error: bool = True) -> None:
        self._flush_on_error = flush_on_error
        self._transaction: Transaction | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def transaction(self) -> Transaction | None:
        """The explicit transaction currently in progress, if any."""
        if self._transaction is not None and self._transaction.is_active:
            return self._transaction
        return None

    # -- entity operations ---------------------------------------------------

    @abstractmethod
    def insert(self, entity: Any) -> None:
        """Stage a new entity for insertion."""

    @abstractmethod
    def update(self, entity: Any) -> None:
        """Attach an entity so its changes are written on the next flush."""

    @abstractmethod
    def delete(self, entity: Any) -> None:
        """Stage an entity for deletion."""

    @abstractmethod
    def get_by_id(self, entity_cls: type[T], entity_id: Any) -> T | None:
        """Load an entity by primary key, or ``None`` if absent."""

    @abstractmethod
    def get_all(self, entity_cls: type[T]) -> list[T]:
        """Load every entity of the given type."""

    @abstractmethod
    def query(self, entity_cls: type[T]) -> IQueryable[T]:
        """Return a lazy queryable over every entity of the given type."""

    # -- synchronisation -----------------------------------------------------

    @abstractmethod
    def flush(self) -> None:
        """Synchronise staged changes with the backing store."""

    @abstractmethod
    def commit(self) -> None:
        """Flush and make all staged changes durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard staged changes that have not been made durable."""

    def begin_transaction(self) -> Transaction:
        """Begin an explicit transaction scoped to this unit of work."""
        self._ensure_open()
        if self.transaction is not None:
            raise TransactionError("A transaction is already in progress")
        self._transaction = self._begin_transaction()
        logger.debug("Transaction begun on %s", type(self).__name__)
        return self._transaction

    @abstractmethod
    def _begin_transaction(self) -> Transaction: ...

    # -- lifecycle -----------------------------------------------------------

    def close(self) -> None:
        """Release backend resources. Safe to call more than once."""
        if self._closed:
            return
        try:
            self._release()
        finally:
            self._closed = True
            logger.debug("%s closed", type(self).__name__)

    @abstractmethod
    def _release(self) -> None: ...

    def _ensure_open(self) -> None:
        if self._closed:
            raise UnitOfWorkClosedError(f"{type(self).__name__} is already closed")

    def __enter__(self) -> UnitOfWork:
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            abandoned = self.transaction
            if abandoned is not None:
                logger.warning(
                    "Unit of work exited with an unfinished transaction; rolling back"
                )
                abandoned.rollback()

            if exc_type is None or self._flush_on_error:
                self.commit()
            else:
                self.rollback()
        finally:
            self.close()


@runtime_checkable
class IUnitOfWorkFactory(Protocol):
    """Produces fresh units of work bound to one backend configuration."""

    def begin_unit_of_work(self) -> UnitOfWork: ...
