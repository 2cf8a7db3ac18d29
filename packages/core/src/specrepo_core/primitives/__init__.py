from .exceptions import (
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

__all__ = [
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
