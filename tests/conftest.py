from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002

from venuesync.adapters.sqlalchemy import SqlAlchemyVenueStore, engine_for, shutdown, startup
from venuesync.adapters.sqlalchemy.migrations import upgrade_head
from venuesync.config import ImportConfig

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = engine_for("sqlite+pysqlite:///:memory:")
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def venue_store(sqlite_engine: Engine) -> SqlAlchemyVenueStore:
    return SqlAlchemyVenueStore(sqlite_engine)


@pytest.fixture
def started_store(sqlite_engine: Engine) -> Iterator[SqlAlchemyVenueStore]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield SqlAlchemyVenueStore()
    finally:
        shutdown()


@pytest.fixture
def import_config() -> ImportConfig:
    return ImportConfig(fetch_timeout_seconds=5.0)
