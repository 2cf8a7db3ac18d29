"""specrepo-core: generic repository and specification pattern.

Backend-neutral ports, the generic repository, specification base classes,
the specification locator and an in-memory backend. Pydantic is used for
settings only.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import (
    EnumerableQueryable,
    InMemoryDatabase,
    InMemoryTransaction,
    InMemoryUnitOfWork,
    InMemoryUnitOfWorkFactory,
)
from .config import UnitOfWorkSettings

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    IGenericRepository,
    IQueryable,
    ISpecification,
    ISpecificationLocator,
    ISpecificationResult,
    IUnitOfWorkFactory,
    Transaction,
    UnitOfWork,
)

# ── Primitives ───────────────────────────────────────────────────
from .primitives.exceptions import (
    CardinalityError,
    InvalidArgumentError,
    MultipleResultsError,
    NoResultError,
    PersistenceError,
    QueryError,
    SpecificationError,
    SpecificationNotFoundError,
    SpecificationNotInitializedError,
    SpecificationRegistrationError,
    SpecificationStateError,
    SpecRepoError,
    TransactionError,
    UnitOfWorkClosedError,
    UnitOfWorkError,
)

# ── Repository & specifications ─────────────────────────────────
from .repository import GenericRepository
from .specifications import (
    QueryableSpecification,
    QueryableSpecificationResult,
    Specification,
    SpecificationLocator,
)

__all__ = [
    # Adapters
    "EnumerableQueryable",
    "InMemoryDatabase",
    "InMemoryTransaction",
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
    # Config
    "UnitOfWorkSettings",
    # Ports
    "IGenericRepository",
    "IQueryable",
    "ISpecification",
    "ISpecificationLocator",
    "ISpecificationResult",
    "IUnitOfWorkFactory",
    "Transaction",
    "UnitOfWork",
    # Repository & specifications
    "GenericRepository",
    "QueryableSpecification",
    "QueryableSpecificationResult",
    "Specification",
    "SpecificationLocator",
    # Exceptions
    "CardinalityError",
    "InvalidArgumentError",
    "MultipleResultsError",
    "NoResultError",
    "PersistenceError",
    "QueryError",
    "SpecRepoError",
    "SpecificationError",
    "SpecificationNotFoundError",
    "SpecificationNotInitializedError",
    "SpecificationRegistrationError",
    "SpecificationStateError",
    "TransactionError",
    "UnitOfWorkClosedError",
    "UnitOfWorkError",
]
