from .criteria import Criteria
from .queryable import SelectQueryable
from .uow import SQLAlchemyTransaction, SQLAlchemyUnitOfWork, SQLAlchemyUnitOfWorkFactory

__all__ = [
    "Criteria",
    "SQLAlchemyTransaction",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyUnitOfWorkFactory",
    "SelectQueryable",
]
