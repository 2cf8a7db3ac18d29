"""Shared fixtures for SQLAlchemy persistence tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from specrepo_persistence_sqlalchemy import SQLAlchemySettings, SQLAlchemyUnitOfWorkFactory

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy import MetaData


@pytest.fixture
def database_url(tmp_path) -> str:
    """File-backed SQLite, so every unit of work gets its own connection."""
    return f"sqlite:///{tmp_path / 'specrepo.db'}"


@pytest.fixture
def factory_for(
    database_url: str,
) -> Iterator[Callable[..., SQLAlchemyUnitOfWorkFactory]]:
    """Build a factory on the test database and create the given tables."""
    created: list[SQLAlchemyUnitOfWorkFactory] = []

    def create(metadata: MetaData, **overrides: Any) -> SQLAlchemyUnitOfWorkFactory:
        settings = SQLAlchemySettings(url=database_url, **overrides)
        factory = SQLAlchemyUnitOfWorkFactory(settings=settings)
        metadata.create_all(factory.engine)
        created.append(factory)
        return factory

    yield create

    for factory in created:
        factory.dispose()
