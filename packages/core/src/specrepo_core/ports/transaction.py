"""Transaction: explicit commit/rollback scope inside a Unit of Work."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..primitives.exceptions import TransactionError

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger("specrepo.uow")


class Transaction(ABC):
    """
    Abstract base class for backend transactions.

    A transaction finishes exactly once, by ``commit()`` or ``rollback()``.
    Used as a context manager it rolls back when the block is left without
    either having been called, whether by exception or by simply forgetting::

        with uow.begin_transaction() as tx:
            repo.insert(customer)
            tx.commit()
    """

    def __init__(self) -> None:
        self._finished = False

    @property
    def is_active(self) -> bool:
        return not self._finished

    def commit(self) -> None:
        """Make the work done inside the transaction durable."""
        self._ensure_active()
        self._commit()
        self._finished = True
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        """Discard the work done inside the transaction."""
        self._ensure_active()
        try:
            self._rollback()
        finally:
            self._finished = True
        logger.debug("Transaction rolled back")

    def _ensure_active(self) -> None:
        if self._finished:
            raise TransactionError("Transaction has already been committed or rolled back")

    @abstractmethod
    def _commit(self) -> None: ...

    @abstractmethod
    def _rollback(self) -> None: ...

    def __enter__(self) -> Transaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self.is_active:
            logger.debug(
                "Rolling back transaction left without commit (error=%s)",
                exc_type.__name__ if exc_type else None,
            )
            self.rollback()
