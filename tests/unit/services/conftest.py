"""Fixtures for migration service tests."""

import pytest
from sqlalchemy import Engine, event

from sqlshift.store import ensure_tables


@pytest.fixture
def executed_sql(engine: Engine) -> list[str]:
    """Capture every SQL string sent to the driver through ``engine``."""
    captured: list[str] = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        captured.append(statement)

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    yield captured
    event.remove(engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def provisioned(engine: Engine) -> Engine:
    """Engine with the history tables created."""
    ensure_tables(engine)
    return engine
