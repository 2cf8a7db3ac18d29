"""Shared fixtures for core tests."""

from __future__ import annotations

import pytest

from specrepo_core.adapters.memory import InMemoryDatabase, InMemoryUnitOfWorkFactory
from specrepo_core.config import UnitOfWorkSettings


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def factory(database: InMemoryDatabase) -> InMemoryUnitOfWorkFactory:
    """Factory with default settings (no autoflush, flush on error)."""
    return InMemoryUnitOfWorkFactory(database)


@pytest.fixture
def autoflush_factory(database: InMemoryDatabase) -> InMemoryUnitOfWorkFactory:
    return InMemoryUnitOfWorkFactory(database, UnitOfWorkSettings(autoflush=True))
