"""SelectQueryable: ``IQueryable`` over a generative SQLAlchemy ``Select``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import desc, select

from specrepo_core.primitives.exceptions import InvalidArgumentError, QueryError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Select
    from sqlalchemy.orm import Session

T = TypeVar("T")


class SelectQueryable(Generic[T]):
    """
    Database-backed implementation of ``IQueryable[T]``.

    Predicates and order keys are SQL expressions (``Customer.age == 30``).
    ``take`` is kept aside and rendered as ``LIMIT`` at execution, keeping
    the smallest bound across calls. Filtering or ordering a taken
    queryable would need a subquery, so it raises ``QueryError``.
    """

    __slots__ = ("_limit", "_session", "_statement")

    def __init__(
        self,
        session: Session,
        statement: Select[Any],
        limit: int | None = None,
    ) -> None:
        self._session = session
        self._statement = statement
        self._limit = limit

    @classmethod
    def of(cls, session: Session, entity_cls: type[T]) -> SelectQueryable[T]:
        return cls(session, select(entity_cls))

    @property
    def statement(self) -> Select[Any]:
        """The statement that iteration will execute."""
        if self._limit is None:
            return self._statement
        return self._statement.limit(self._limit)

    def _ensure_unlimited(self, operation: str) -> None:
        if self._limit is not None:
            raise QueryError(f"Cannot apply {operation}() after take() on a SQL queryable")

    def where(self, predicate: Any) -> SelectQueryable[T]:
        self._ensure_unlimited("where")
        return SelectQueryable(self._session, self._statement.where(predicate))

    def order_by(self, key: Any, *, descending: bool = False) -> SelectQueryable[T]:
        self._ensure_unlimited("order_by")
        clause = desc(key) if descending else key
        return SelectQueryable(self._session, self._statement.order_by(clause))

    def take(self, count: int) -> SelectQueryable[T]:
        if count < 0:
            raise InvalidArgumentError(f"take() count must be >= 0, got {count}")
        limit = count if self._limit is None else min(self._limit, count)
        return SelectQueryable(self._session, self._statement, limit)

    def to_list(self) -> list[T]:
        return list(self._session.scalars(self.statement).all())

    def __iter__(self) -> Iterator[T]:
        return iter(self.to_list())
