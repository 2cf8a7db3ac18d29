"""Exceptions for the SQLAlchemy persistence layer."""

from __future__ import annotations

from specrepo_core.primitives.exceptions import (
    PersistenceError,
    TransactionError,
    UnitOfWorkError,
)


class SQLAlchemyPersistenceError(PersistenceError):
    """Base exception for all SQLAlchemy-specific persistence errors."""


class SessionManagementError(SQLAlchemyPersistenceError):
    """Raised when a unit of work is given an invalid session configuration."""


__all__: list[str] = [
    "SQLAlchemyPersistenceError",
    "SessionManagementError",
    "TransactionError",
    "UnitOfWorkError",
]
