"""IGenericRepository: generic repository protocol."""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
ID = TypeVar("ID", contravariant=True)
S = TypeVar("S")


@runtime_checkable
class IGenericRepository(Protocol[T, ID]):
    """
    Generic repository interface for reading and writing domain entities.

    Writes are staged in the bound unit of work; nothing is guaranteed to
    reach the store until that unit of work flushes. Complex reads go
    through ``specify``::

        customer = (
            repo.specify(ICustomerSpecification)
            .with_age(30)
            .to_result()
            .single()
        )
    """

    def insert(self, entity: T) -> None: ...

    def update(self, entity: T) -> None: ...

    def delete(self, entity: T) -> None: ...

    def get_by_id(self, entity_id: ID) -> T | None: ...

    def get_all(self) -> list[T]: ...

    def specify(self, specification_type: type[S]) -> S: ...


__all__ = ["IGenericRepository"]
