"""Settings for the SQLAlchemy unit-of-work factory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field
from sqlalchemy import create_engine

from specrepo_core.config import UnitOfWorkSettings

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class SQLAlchemySettings(UnitOfWorkSettings):
    """
    Engine and session settings.

    Attributes:
        url: SQLAlchemy database URL.
        echo: Log emitted SQL through the ``sqlalchemy.engine`` logger.
        autoflush: Session autoflush; on by default, so queries see pending
            inserts made earlier in the same unit of work.
        expire_on_commit: Kept off so entities stay readable after their
            unit of work has committed and closed.
        engine_options: Extra keyword arguments for ``create_engine``.
    """

    url: str = Field(default="sqlite://", min_length=1)
    echo: bool = False
    autoflush: bool = True
    expire_on_commit: bool = False
    engine_options: dict[str, Any] = Field(default_factory=dict)

    def create_engine(self) -> Engine:
        return create_engine(self.url, echo=self.echo, **self.engine_options)
