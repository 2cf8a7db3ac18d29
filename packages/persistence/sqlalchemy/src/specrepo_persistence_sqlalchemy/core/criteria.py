"""
Criteria: mutable, imperative query builder over a SQLAlchemy session.

SQLAlchemy's ``Select`` is generative: every call returns a new statement.
``Criteria`` keeps the classic criteria-API shape instead. It is one
object, mutated in place, that produces its ``Select`` only when executed::

    criteria = uow.create_criteria(Customer)
    criteria.add(Customer.age >= 18).add_order(Customer.name)
    criteria.set_max_results(10)
    adults = criteria.list()
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import select

from specrepo_core.primitives.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.orm import Session

T = TypeVar("T")


def _non_negative(value: int | None, name: str) -> int | None:
    if value is not None and value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
    return value


class Criteria(Generic[T]):
    """Mutable criteria for one mapped entity class."""

    def __init__(self, session: Session, entity_cls: type[T]) -> None:
        self._session = session
        self._entity_cls = entity_cls
        self._criterions: builtins.list[Any] = []
        self._orders: builtins.list[Any] = []
        self._max_results: int | None = None
        self._first_result: int | None = None

    @property
    def entity_type(self) -> type[T]:
        return self._entity_cls

    @property
    def max_results(self) -> int | None:
        return self._max_results

    @property
    def first_result(self) -> int | None:
        return self._first_result

    # -- mutation -----------------------------------------------------------

    def add(self, *criterions: Any) -> Criteria[T]:
        """AND the given SQL expressions into the criteria."""
        self._criterions.extend(criterions)
        return self

    def add_order(self, *clauses: Any) -> Criteria[T]:
        self._orders.extend(clauses)
        return self

    def set_max_results(self, max_results: int | None) -> Criteria[T]:
        self._max_results = _non_negative(max_results, "max_results")
        return self

    def set_first_result(self, first_result: int | None) -> Criteria[T]:
        self._first_result = _non_negative(first_result, "first_result")
        return self

    def clone(self) -> Criteria[T]:
        """Return an independent copy sharing only the session."""
        copy = Criteria(self._session, self._entity_cls)
        copy._criterions = builtins.list(self._criterions)
        copy._orders = builtins.list(self._orders)
        copy._max_results = self._max_results
        copy._first_result = self._first_result
        return copy

    # -- execution ----------------------------------------------------------

    def to_statement(self) -> Select[Any]:
        statement = select(self._entity_cls)
        if self._criterions:
            statement = statement.where(*self._criterions)
        if self._orders:
            statement = statement.order_by(*self._orders)
        if self._first_result is not None:
            statement = statement.offset(self._first_result)
        if self._max_results is not None:
            statement = statement.limit(self._max_results)
        return statement

    def list(self) -> builtins.list[T]:
        return builtins.list(self._session.scalars(self.to_statement()).all())

    def unique_result(self) -> T | None:
        """Return the single matching row, or ``None`` when nothing matches.

        Raises:
            sqlalchemy.exc.MultipleResultsFound: more than one row matched.
        """
        return self._session.scalars(self.to_statement()).one_or_none()

    def __repr__(self) -> str:
        return (
            f"Criteria({self._entity_cls.__name__}, criterions={len(self._criterions)}, "
            f"max_results={self._max_results})"
        )
