"""QueryableSpecificationResult: result handle over a lazy queryable."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..primitives.exceptions import (
    InvalidArgumentError,
    MultipleResultsError,
    NoResultError,
)

if TYPE_CHECKING:
    from ..ports.queryable import IQueryable

T = TypeVar("T")


class QueryableSpecificationResult(Generic[T]):
    """
    ``ISpecificationResult[T]`` over an immutable ``IQueryable[T]``.

    ``take`` never touches the wrapped queryable; it rebinds the handle to a
    new, narrower one. The query runs when ``to_list``, ``single`` or
    ``first`` is called, and again on every subsequent call.
    """

    __slots__ = ("_entity_type", "_queryable")

    def __init__(
        self, queryable: IQueryable[T], entity_type: type[Any] | None = None
    ) -> None:
        self._queryable = queryable
        self._entity_type = entity_type

    @property
    def queryable(self) -> IQueryable[T]:
        return self._queryable

    def take(self, count: int) -> QueryableSpecificationResult[T]:
        if count < 0:
            raise InvalidArgumentError(f"take() count must be >= 0, got {count}")
        self._queryable = self._queryable.take(count)
        return self

    def to_list(self) -> list[T]:
        return self._queryable.to_list()

    def single(self) -> T:
        # Two rows are enough to tell "exactly one" from "more than one".
        matches = self._queryable.take(2).to_list()
        if not matches:
            raise NoResultError(self._entity_type)
        if len(matches) > 1:
            raise MultipleResultsError(self._entity_type)
        return matches[0]

    def first(self) -> T | None:
        return next(iter(self._queryable.take(1)), None)
