from .database import InMemoryDatabase
from .queryable import EnumerableQueryable
from .unit_of_work import (
    InMemoryTransaction,
    InMemoryUnitOfWork,
    InMemoryUnitOfWorkFactory,
)

__all__ = [
    "EnumerableQueryable",
    "InMemoryDatabase",
    "InMemoryTransaction",
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
]
