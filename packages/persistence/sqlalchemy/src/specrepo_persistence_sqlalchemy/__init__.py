"""SQLAlchemy Persistence Adapter."""

from __future__ import annotations

from .config import SQLAlchemySettings
from .core.criteria import Criteria
from .core.queryable import SelectQueryable
from .core.uow import (
    SQLAlchemyTransaction,
    SQLAlchemyUnitOfWork,
    SQLAlchemyUnitOfWorkFactory,
)
from .exceptions import (
    SessionManagementError,
    SQLAlchemyPersistenceError,
)
from .specifications import CriteriaSpecification, CriteriaSpecificationResult

__all__ = [
    # Core
    "Criteria",
    "SelectQueryable",
    "SQLAlchemySettings",
    "SQLAlchemyTransaction",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyUnitOfWorkFactory",
    # Specifications
    "CriteriaSpecification",
    "CriteriaSpecificationResult",
    # Exceptions
    "SQLAlchemyPersistenceError",
    "SessionManagementError",
]
