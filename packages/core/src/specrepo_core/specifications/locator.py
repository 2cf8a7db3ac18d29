"""SpecificationLocator: explicit registry of specification factories."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar, cast

from ..primitives.exceptions import (
    SpecificationNotFoundError,
    SpecificationRegistrationError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("specrepo.locator")

S = TypeVar("S")
C = TypeVar("C", bound=type[Any])


class SpecificationLocator:
    """Maps ``(specification type, entity type)`` pairs to factories.

    The specification type is usually a domain protocol
    (``ICustomerSpecification``) and the factory a backend-specific class.
    Wire one locator per backend and inject it into the repositories::

        locator = SpecificationLocator()
        locator.register(ICustomerSpecification, Customer, SqlCustomerSpecification)

        @locator.provides(IOrderSpecification, Order)
        class SqlOrderSpecification(CriteriaSpecification[Order]): ...

    **Conflict detection:** registering a second, different factory for the
    same pair raises ``SpecificationRegistrationError``. Registering the same
    factory again is a no-op.
    """

    def __init__(self) -> None:
        self._factories: dict[tuple[type[Any], type[Any]], Callable[[], Any]] = {}

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        specification_type: type[Any],
        entity_type: type[Any],
        factory: Callable[[], Any] | None = None,
    ) -> None:
        resolved = factory if factory is not None else specification_type
        key = (specification_type, entity_type)
        existing = self._factories.get(key)
        if existing is not None and existing is not resolved:
            msg = (
                f"Duplicate specification for {specification_type.__name__} "
                f"on {entity_type.__name__}: "
                f"{getattr(existing, '__name__', existing)!s} already registered, "
                f"cannot register {getattr(resolved, '__name__', resolved)!s}"
            )
            raise SpecificationRegistrationError(msg)
        self._factories[key] = resolved
        logger.debug(
            "Registered specification %s[%s] -> %s",
            specification_type.__name__,
            entity_type.__name__,
            getattr(resolved, "__name__", resolved),
        )

    def provides(
        self, specification_type: type[Any], entity_type: type[Any]
    ) -> Callable[[C], C]:
        """Class decorator form of :meth:`register`."""

        def decorator(cls: C) -> C:
            self.register(specification_type, entity_type, cls)
            return cls

        return decorator

    # ── Lookup ───────────────────────────────────────────────────

    def resolve(self, specification_type: type[S], entity_type: type[Any]) -> S:
        factory = self._factories.get((specification_type, entity_type))
        if factory is None:
            registered = [
                spec.__name__
                for spec, entity in self._factories
                if entity is entity_type
            ]
            raise SpecificationNotFoundError(
                specification_type, entity_type, registered
            )
        specification = factory()
        logger.debug(
            "Resolved %s[%s] -> %s",
            specification_type.__name__,
            entity_type.__name__,
            type(specification).__name__,
        )
        return cast("S", specification)

    def is_registered(
        self, specification_type: type[Any], entity_type: type[Any]
    ) -> bool:
        return (specification_type, entity_type) in self._factories

    # ── Introspection ────────────────────────────────────────────

    def registrations(self) -> dict[str, dict[str, str]]:
        """Return a snapshot of all registrations (for debugging)."""
        snapshot: dict[str, dict[str, str]] = {}
        for (spec, entity), factory in self._factories.items():
            snapshot.setdefault(entity.__name__, {})[spec.__name__] = str(
                getattr(factory, "__name__", factory)
            )
        return snapshot

    def __len__(self) -> int:
        return len(self._factories)

    # ── Cleanup ──────────────────────────────────────────────────

    def clear(self) -> None:
        """Clear all registrations (testing utility)."""
        self._factories.clear()


__all__ = ["SpecificationLocator"]
