"""
SQLAlchemy implementation of the Unit of Work pattern.
"""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING, Any, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from specrepo_core.ports.transaction import Transaction
from specrepo_core.ports.unit_of_work import UnitOfWork

from ..config import SQLAlchemySettings
from ..exceptions import SessionManagementError
from .criteria import Criteria
from .queryable import SelectQueryable

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session

    SessionFactory = Callable[[], Session]

logger = logging.getLogger("specrepo.uow")

T = TypeVar("T")


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of Work implementation using a SQLAlchemy ``Session``.

    Supports two usage patterns:

    1. **Caller-Managed Sessions**:
       ```python
       with SQLAlchemyUnitOfWork(session=session) as uow:
           ...
       ```
       The caller owns the session; ``close()`` leaves it open.

    2. **Self-Managed Sessions**:
       ```python
       factory = sessionmaker(engine, expire_on_commit=False)
       with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
           ...
       ```
       The UoW creates the session immediately and closes it on ``close()``.

    **Important:** Exactly one of `session` or `session_factory` must be provided.

    Reads follow the session's autoflush setting: with autoflush on,
    ``get_all`` and queries see inserts staged earlier in the same unit of
    work. Session errors are never translated.
    """

    def __init__(
        self,
        session: Session | None = None,
        session_factory: SessionFactory | None = None,
        *,
        flush_on_error: bool = True,
    ) -> None:
        if session is not None and session_factory is not None:
            raise SessionManagementError(
                "Cannot provide both 'session' and 'session_factory'. "
                "Use either caller-managed (session) or self-managed "
                "(session_factory) pattern."
            )

        if session is None and session_factory is None:
            raise SessionManagementError(
                "Must provide either 'session' or 'session_factory'. "
                "Use caller-managed pattern with session=(Session) "
                "or self-managed pattern with session_factory=(callable)."
            )

        super().__init__(flush_on_error=flush_on_error)
        self._owns_session = session is None
        if session is None:
            session = cast("SessionFactory", session_factory)()
        self._session: Session = session

    @property
    def session(self) -> Session:
        """The underlying session. Raises once the UoW is closed."""
        self._ensure_open()
        return self._session

    # -- entity operations ---------------------------------------------------

    def insert(self, entity: Any) -> None:
        self.session.add(entity)

    def update(self, entity: Any) -> None:
        session = self.session
        if entity not in session:
            # Re-attach a detached instance; its recorded changes flush as UPDATE.
            session.add(entity)

    def delete(self, entity: Any) -> None:
        self.session.delete(entity)

    def get_by_id(self, entity_cls: type[T], entity_id: Any) -> T | None:
        return self.session.get(entity_cls, entity_id)

    def get_all(self, entity_cls: type[T]) -> list[T]:
        return list(self.session.scalars(select(entity_cls)).all())

    def query(self, entity_cls: type[T]) -> SelectQueryable[T]:
        return SelectQueryable.of(self.session, entity_cls)

    def create_criteria(self, entity_cls: type[T]) -> Criteria[T]:
        return Criteria(self.session, entity_cls)

    # -- synchronisation -----------------------------------------------------

    def flush(self) -> None:
        self.session.flush()

    def commit(self) -> None:
        """Commit the current transaction, rolling back if the commit fails."""
        session = self.session
        try:
            session.commit()
        except Exception:
            logger.error("Commit failed; rolling back", exc_info=True)
            with contextlib.suppress(Exception):
                session.rollback()
            raise
        logger.debug("Session committed")

    def rollback(self) -> None:
        session = self.session
        if session.in_transaction():
            session.rollback()

    def _begin_transaction(self) -> SQLAlchemyTransaction:
        return SQLAlchemyTransaction(self.session)

    def _release(self) -> None:
        if self._owns_session:
            self._session.close()


class SQLAlchemyTransaction(Transaction):
    """
    Explicit transaction over the session's root transaction.

    Joins the transaction the session has already autobegun, if any, so
    work staged earlier in the same unit of work commits or rolls back with
    it.
    """

    def __init__(self, session: Session) -> None:
        super().__init__()
        self._session = session
        if not session.in_transaction():
            session.begin()

    def _commit(self) -> None:
        self._session.commit()

    def _rollback(self) -> None:
        self._session.rollback()


class SQLAlchemyUnitOfWorkFactory:
    """
    Creates self-managed :class:`SQLAlchemyUnitOfWork` instances.

    ``engine`` takes precedence over ``settings.url``; an engine built from
    settings is owned by the factory and released by :meth:`dispose`.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        settings: SQLAlchemySettings | None = None,
    ) -> None:
        self.settings = settings or SQLAlchemySettings()
        self._owns_engine = engine is None
        self.engine: Engine = engine if engine is not None else self.settings.create_engine()
        self.session_factory = sessionmaker(
            self.engine,
            autoflush=self.settings.autoflush,
            expire_on_commit=self.settings.expire_on_commit,
        )

    def begin_unit_of_work(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(
            session_factory=self.session_factory,
            flush_on_error=self.settings.flush_on_error,
        )

    def dispose(self) -> None:
        if self._owns_engine:
            self.engine.dispose()
