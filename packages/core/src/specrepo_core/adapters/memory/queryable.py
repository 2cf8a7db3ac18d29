"""EnumerableQueryable: lazy, immutable query pipeline over Python iterables."""

from __future__ import annotations

from functools import partial
from itertools import islice
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ...primitives.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

T = TypeVar("T")


def _filter(predicate: Callable[[Any], bool], items: Iterable[Any]) -> Iterable[Any]:
    return (item for item in items if predicate(item))


def _sort(
    key: Callable[[Any], Any], descending: bool, items: Iterable[Any]
) -> Iterable[Any]:
    return sorted(items, key=key, reverse=descending)


def _limit(count: int, items: Iterable[Any]) -> Iterable[Any]:
    return islice(items, count)


class EnumerableQueryable(Generic[T]):
    """
    In-memory implementation of ``IQueryable[T]``.

    Wraps a zero-argument *source* callable plus a tuple of deferred
    operations. Narrowing returns a new queryable sharing the same source;
    nothing runs until iteration, and each iteration calls the source again::

        adults = EnumerableQueryable(lambda: store).where(lambda c: c.age >= 18)
        first_two = adults.take(2)
        first_two.to_list()   # evaluates now
    """

    __slots__ = ("_operations", "_source")

    def __init__(
        self,
        source: Callable[[], Iterable[T]],
        operations: tuple[Callable[[Iterable[Any]], Iterable[Any]], ...] = (),
    ) -> None:
        self._source = source
        self._operations = operations

    def _extend(
        self, operation: Callable[[Iterable[Any]], Iterable[Any]]
    ) -> EnumerableQueryable[T]:
        return EnumerableQueryable(self._source, (*self._operations, operation))

    def where(self, predicate: Callable[[T], bool]) -> EnumerableQueryable[T]:
        return self._extend(partial(_filter, predicate))

    def order_by(
        self, key: Callable[[T], Any], *, descending: bool = False
    ) -> EnumerableQueryable[T]:
        return self._extend(partial(_sort, key, descending))

    def take(self, count: int) -> EnumerableQueryable[T]:
        if count < 0:
            raise InvalidArgumentError(f"take() count must be >= 0, got {count}")
        return self._extend(partial(_limit, count))

    def to_list(self) -> list[T]:
        return list(self)

    def __iter__(self) -> Iterator[T]:
        items: Iterable[Any] = self._source()
        for operation in self._operations:
            items = operation(items)
        return iter(items)

    def __repr__(self) -> str:
        return f"EnumerableQueryable(operations={len(self._operations)})"
