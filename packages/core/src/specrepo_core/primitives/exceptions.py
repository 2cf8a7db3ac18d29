"""Exception hierarchy for specrepo-core."""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


def _type_name(value: object) -> str:
    return getattr(value, "__name__", repr(value))


class SpecRepoError(Exception):
    """Root exception for the entire specrepo toolkit."""


class InvalidArgumentError(SpecRepoError, ValueError):
    """Raised when an argument fails validation at the repository boundary."""


# ── Specifications ───────────────────────────────────────────────────


class SpecificationError(SpecRepoError):
    """Base class for all specification errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class SpecificationNotFoundError(SpecificationError, LookupError):
    """No specification is registered for a (specification, entity) pair.

    Provides fuzzy-matched suggestions among the registered specification
    names for the same entity type.
    """

    def __init__(
        self,
        specification_type: object,
        entity_type: object,
        registered: list[str] | None = None,
    ) -> None:
        self.specification_type = specification_type
        self.entity_type = entity_type
        self.suggestions = get_close_matches(
            _type_name(specification_type), registered or [], n=3, cutoff=0.6
        )

        message = (
            f"No specification registered for {_type_name(specification_type)} "
            f"on entity {_type_name(entity_type)}."
        )
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "SPECIFICATION_NOT_FOUND",
            "message": str(self),
            "specification": _type_name(self.specification_type),
            "entity": _type_name(self.entity_type),
            "suggestions": self.suggestions,
        }


class SpecificationRegistrationError(SpecificationError):
    """Raised when a conflicting specification registration is detected."""


class SpecificationStateError(SpecificationError):
    """Raised when a specification is used out of its lifecycle order."""


class SpecificationNotInitializedError(SpecificationStateError):
    """Raised when a specification is queried before ``initialize()``."""


# ── Results ──────────────────────────────────────────────────────────


class CardinalityError(SpecRepoError):
    """A query expected exactly one entity but matched zero or several."""

    def __init__(self, message: str, entity_type: object | None = None) -> None:
        self.entity_type = entity_type
        super().__init__(message)


class NoResultError(CardinalityError, LookupError):
    """``single()`` matched no entity."""

    def __init__(self, entity_type: object | None = None) -> None:
        name = _type_name(entity_type) if entity_type is not None else "entity"
        super().__init__(f"Expected exactly one {name}, found none", entity_type)


class MultipleResultsError(CardinalityError):
    """``single()`` matched more than one entity."""

    def __init__(self, entity_type: object | None = None) -> None:
        name = _type_name(entity_type) if entity_type is not None else "entity"
        super().__init__(
            f"Expected exactly one {name}, found more than one", entity_type
        )


class QueryError(SpecRepoError):
    """Raised when a queryable is composed in an unsupported order."""


# ── Persistence ──────────────────────────────────────────────────────


class PersistenceError(SpecRepoError):
    """Base class for all persistence-related errors."""


class UnitOfWorkError(PersistenceError):
    """Raised when Unit of Work operations fail."""


class UnitOfWorkClosedError(UnitOfWorkError):
    """Raised when a closed Unit of Work is used."""


class TransactionError(PersistenceError):
    """Raised when a transaction is begun or finished out of order."""
