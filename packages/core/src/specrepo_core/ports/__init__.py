from specrepo_core.ports.queryable import IQueryable
from specrepo_core.ports.repository import IGenericRepository
from specrepo_core.ports.specification import ISpecification, ISpecificationLocator, ISpecificationResult
from specrepo_core.ports.transaction import Transaction
from specrepo_core.ports.unit_of_work import IUnitOfWorkFactory, UnitOfWork

__all__ = [
    "IGenericRepository",
    "IQueryable",
    "ISpecification",
    "ISpecificationLocator",
    "ISpecificationResult",
    "IUnitOfWorkFactory",
    "Transaction",
    "UnitOfWork",
]
