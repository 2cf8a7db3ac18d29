"""Specification base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, cast

from ..primitives.exceptions import (
    InvalidArgumentError,
    SpecificationNotInitializedError,
    SpecificationStateError,
)
from .result import QueryableSpecificationResult

if TYPE_CHECKING:
    from ..ports.queryable import IQueryable
    from ..ports.specification import ISpecificationResult
    from ..ports.unit_of_work import UnitOfWork

T = TypeVar("T")
QS = TypeVar("QS", bound="QueryableSpecification[Any]")


class Specification(ABC, Generic[T]):
    """
    Base class for domain specifications.

    A specification is bound to one unit of work, exactly once, through
    :meth:`initialize` (``GenericRepository.specify`` does this). Subclasses
    build their backend query in :meth:`_bind` and expose domain-named
    filters that return ``self`` for chaining.

    The entity type comes from the ``entity_cls`` constructor argument or
    the class attribute of the same name.
    """

    entity_cls: ClassVar[type[Any] | None] = None

    def __init__(self, entity_cls: type[T] | None = None) -> None:
        self._entity_type: type[Any] | None = entity_cls or type(self).entity_cls
        self._unit_of_work: UnitOfWork | None = None

    @property
    def entity_type(self) -> type[T]:
        if self._entity_type is None:
            raise InvalidArgumentError(
                f"{type(self).__name__} has no entity type; set 'entity_cls' "
                "on the class or pass it to the constructor"
            )
        return self._entity_type

    @property
    def is_initialized(self) -> bool:
        return self._unit_of_work is not None

    @property
    def unit_of_work(self) -> UnitOfWork:
        self._ensure_initialized()
        return cast("UnitOfWork", self._unit_of_work)

    def initialize(self, unit_of_work: UnitOfWork) -> None:
        """Bind the specification to *unit_of_work*. Allowed once."""
        if unit_of_work is None:
            raise InvalidArgumentError("unit_of_work can not be None")
        if self._unit_of_work is not None:
            raise SpecificationStateError(
                f"{type(self).__name__} is already initialized"
            )
        self._bind(unit_of_work)
        self._unit_of_work = unit_of_work

    def _ensure_initialized(self) -> None:
        if self._unit_of_work is None:
            raise SpecificationNotInitializedError(
                f"{type(self).__name__} must be initialized with a unit of work "
                "before it can be queried"
            )

    @abstractmethod
    def _bind(self, unit_of_work: UnitOfWork) -> None:
        """Create the backend query handle for ``entity_type``."""

    @abstractmethod
    def to_result(self) -> ISpecificationResult[T]:
        """Finalise the specification into an executable result."""


class QueryableSpecification(Specification[T]):
    """
    Specification backed by the unit of work's lazy queryable.

    Works with any unit of work whose ``query()`` returns an ``IQueryable``.
    Predicates are whatever that queryable understands (Python callables for
    the in-memory backend, SQL expressions for SQLAlchemy)::

        class CustomerSpecification(QueryableSpecification[Customer]):
            entity_cls = Customer

            def with_age(self, age: int) -> CustomerSpecification:
                return self.filter(lambda c: c.age == age)
    """

    def __init__(self, entity_cls: type[T] | None = None) -> None:
        super().__init__(entity_cls)
        self._queryable: IQueryable[T] | None = None

    def _bind(self, unit_of_work: UnitOfWork) -> None:
        self._queryable = unit_of_work.query(self.entity_type)

    @property
    def queryable(self) -> IQueryable[T]:
        self._ensure_initialized()
        return cast("IQueryable[T]", self._queryable)

    def filter(self: QS, predicate: Any) -> QS:
        self._queryable = self.queryable.where(predicate)
        return self

    def order_by(self: QS, key: Any, *, descending: bool = False) -> QS:
        self._queryable = self.queryable.order_by(key, descending=descending)
        return self

    def to_result(self) -> QueryableSpecificationResult[T]:
        return QueryableSpecificationResult(self.queryable, self.entity_type)
