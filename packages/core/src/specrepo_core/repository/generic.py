"""GenericRepository: unit-of-work backed repository with specifications."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, get_args, get_origin

from ..primitives.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from ..ports.specification import ISpecificationLocator
    from ..ports.unit_of_work import UnitOfWork

logger = logging.getLogger("specrepo.repository")

T = TypeVar("T")
ID = TypeVar("ID")
S = TypeVar("S")


def _ensure_not_none(value: object, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"Argument '{name}' can not be None.")


class GenericRepository(Generic[T, ID]):
    """
    Generic repository over a :class:`UnitOfWork`.

    Every command is forwarded to the bound unit of work. Flushing to the
    backing store is the unit of work's business, so the caller keeps full
    control over when the database is hit. The repository adds no
    validation of its own beyond requiring its two collaborators.

    The entity type is inferred from a parametrised base class, or given
    explicitly::

        class CustomerRepository(GenericRepository[Customer, int]):
            pass

        repo = CustomerRepository(uow, locator)
        orders = GenericRepository(uow, locator, entity_cls=Order)

    A repository stays bound to its unit of work and locator for its whole
    lifetime and must not outlive the unit of work.
    """

    entity_cls: ClassVar[type[Any] | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("entity_cls") is not None:
            return
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if isinstance(origin, type) and issubclass(origin, GenericRepository):
                args = get_args(base)
                if args and isinstance(args[0], type):
                    cls.entity_cls = args[0]
                    return

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        specification_locator: ISpecificationLocator,
        *,
        entity_cls: type[T] | None = None,
    ) -> None:
        _ensure_not_none(unit_of_work, "unit_of_work")
        _ensure_not_none(specification_locator, "specification_locator")

        resolved = entity_cls or type(self).entity_cls
        if resolved is None:
            raise InvalidArgumentError(
                f"{type(self).__name__} has no entity type; parametrise the base "
                "class or pass 'entity_cls'."
            )

        self._unit_of_work = unit_of_work
        self._specification_locator = specification_locator
        self._entity_cls: type[T] = resolved

    @property
    def unit_of_work(self) -> UnitOfWork:
        return self._unit_of_work

    @property
    def specification_locator(self) -> ISpecificationLocator:
        return self._specification_locator

    @property
    def entity_type(self) -> type[T]:
        return self._entity_cls

    # -- commands -----------------------------------------------------------

    def insert(self, entity: T) -> None:
        logger.debug("insert %s", self._entity_cls.__name__)
        self._unit_of_work.insert(entity)

    def update(self, entity: T) -> None:
        logger.debug("update %s", self._entity_cls.__name__)
        self._unit_of_work.update(entity)

    def delete(self, entity: T) -> None:
        logger.debug("delete %s", self._entity_cls.__name__)
        self._unit_of_work.delete(entity)

    # -- queries ------------------------------------------------------------

    def get_by_id(self, entity_id: ID) -> T | None:
        return self._unit_of_work.get_by_id(self._entity_cls, entity_id)

    def get_all(self) -> list[T]:
        return self._unit_of_work.get_all(self._entity_cls)

    def specify(self, specification_type: type[S]) -> S:
        """
        Resolve a specification for this repository's entity type, bound to
        the repository's unit of work, ready for fluent filtering.

        Raises:
            SpecificationNotFoundError: the locator has no registration.
        """
        specification = self._specification_locator.resolve(
            specification_type, self._entity_cls
        )
        specification.initialize(self._unit_of_work)  # type: ignore[attr-defined]
        return specification
