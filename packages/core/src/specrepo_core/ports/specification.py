"""Specification, specification result and locator protocols."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .unit_of_work import UnitOfWork

T = TypeVar("T")
S = TypeVar("S")


@runtime_checkable
class ISpecificationResult(Protocol[T]):
    """
    Finalised, executable query handle.

    This is where a lazily built query is actually executed: ``to_list``,
    ``single`` and ``first`` run it each time they are called. ``take``
    narrows the handle in place and returns it for chaining. Which entities
    survive ``take`` is backend-defined unless the specification ordered
    them.
    """

    def take(self, count: int) -> ISpecificationResult[T]: ...

    def to_list(self) -> list[T]: ...

    def single(self) -> T:
        """Return the only match.

        Raises:
            NoResultError: nothing matched.
            MultipleResultsError: more than one entity matched.
        """
        ...

    def first(self) -> T | None: ...


@runtime_checkable
class ISpecification(Protocol[T]):
    """
    Domain-oriented query over one entity type.

    Concrete specifications expose fluent, domain-named filters
    (``with_age(30)``) that return the specification itself, and finish with
    :meth:`to_result`.
    """

    def initialize(self, unit_of_work: UnitOfWork) -> None: ...

    def to_result(self) -> ISpecificationResult[T]: ...


@runtime_checkable
class ISpecificationLocator(Protocol):
    """Resolves specification implementations by type."""

    def resolve(self, specification_type: type[S], entity_type: type[Any]) -> S: ...
