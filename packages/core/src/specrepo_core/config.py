"""Validated configuration shared by every unit-of-work factory."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UnitOfWorkSettings(BaseModel):
    """
    Settings consumed by unit-of-work factories.

    Attributes:
        autoflush: Flush staged changes before bulk reads and queries, so a
            session reads its own pending inserts.
        flush_on_error: Commit staged changes when the ``with`` block exits
            through an exception. Work inside an unfinished explicit
            transaction is rolled back regardless.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    autoflush: bool = False
    flush_on_error: bool = True
