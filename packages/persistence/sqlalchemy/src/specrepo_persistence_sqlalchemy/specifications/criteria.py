"""Criteria-style specifications and their result handle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from sqlalchemy.exc import MultipleResultsFound

from specrepo_core.primitives.exceptions import (
    InvalidArgumentError,
    MultipleResultsError,
    NoResultError,
    SpecificationError,
)
from specrepo_core.specifications.base import Specification

if TYPE_CHECKING:
    from specrepo_core.ports.unit_of_work import UnitOfWork

    from ..core.criteria import Criteria

T = TypeVar("T")
CS = TypeVar("CS", bound="CriteriaSpecification[Any]")


class CriteriaSpecificationResult(Generic[T]):
    """
    ``ISpecificationResult[T]`` over a mutable :class:`Criteria`.

    ``take`` writes the max-results setting of the wrapped criteria
    directly. Callers holding only the result contract cannot tell this
    apart from ``QueryableSpecificationResult``.
    """

    __slots__ = ("_criteria",)

    def __init__(self, criteria: Criteria[T]) -> None:
        self._criteria = criteria

    @property
    def criteria(self) -> Criteria[T]:
        return self._criteria

    def take(self, count: int) -> CriteriaSpecificationResult[T]:
        if count < 0:
            raise InvalidArgumentError(f"take() count must be >= 0, got {count}")
        current = self._criteria.max_results
        self._criteria.set_max_results(count if current is None else min(current, count))
        return self

    def to_list(self) -> list[T]:
        return self._criteria.list()

    def single(self) -> T:
        try:
            entity = self._criteria.unique_result()
        except MultipleResultsFound as exc:
            raise MultipleResultsError(self._criteria.entity_type) from exc
        if entity is None:
            raise NoResultError(self._criteria.entity_type)
        return entity

    def first(self) -> T | None:
        narrowed = self._criteria.clone()
        current = narrowed.max_results
        narrowed.set_max_results(1 if current is None else min(current, 1))
        rows = narrowed.list()
        return rows[0] if rows else None


class CriteriaSpecification(Specification[T]):
    """
    Specification backed by a :class:`Criteria`.

    Needs a unit of work exposing ``create_criteria`` (the SQLAlchemy one).
    Domain filters add SQL expressions to the criteria in place::

        class SqlCustomerSpecification(CriteriaSpecification[Customer]):
            entity_cls = Customer

            def with_age(self, age: int) -> SqlCustomerSpecification:
                return self.add(Customer.age == age)

    ``to_result`` hands out a result over a clone of the criteria, so every
    result is independent of the specification and of earlier results.
    """

    def __init__(self, entity_cls: type[T] | None = None) -> None:
        super().__init__(entity_cls)
        self._criteria: Criteria[T] | None = None

    def _bind(self, unit_of_work: UnitOfWork) -> None:
        create_criteria = getattr(unit_of_work, "create_criteria", None)
        if create_criteria is None:
            raise SpecificationError(
                f"{type(self).__name__} requires a unit of work that supports "
                f"criteria queries, got {type(unit_of_work).__name__}"
            )
        self._criteria = create_criteria(self.entity_type)

    @property
    def criteria(self) -> Criteria[T]:
        self._ensure_initialized()
        return cast("Criteria[T]", self._criteria)

    def add(self: CS, *criterions: Any) -> CS:
        self.criteria.add(*criterions)
        return self

    def add_order(self: CS, *clauses: Any) -> CS:
        self.criteria.add_order(*clauses)
        return self

    def to_result(self) -> CriteriaSpecificationResult[T]:
        return CriteriaSpecificationResult(self.criteria.clone())
