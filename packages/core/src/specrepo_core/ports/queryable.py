"""IQueryable: immutable, lazily evaluated query sequence."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")


@runtime_checkable
class IQueryable(Protocol[T]):
    """
    Protocol for lazily evaluated, immutable query sequences.

    Every narrowing call returns a **new** queryable and leaves the receiver
    untouched. Nothing runs until the queryable is iterated, and every
    iteration runs the query again against current data.

    The predicate and key types are backend-specific: Python callables for
    in-memory sequences, SQL expressions for database-backed ones.
    """

    def where(self, predicate: Any) -> IQueryable[T]: ...

    def order_by(self, key: Any, *, descending: bool = False) -> IQueryable[T]: ...

    def take(self, count: int) -> IQueryable[T]: ...

    def to_list(self) -> list[T]: ...

    def __iter__(self) -> Iterator[T]: ...
