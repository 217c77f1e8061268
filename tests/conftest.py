"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest
from sqlalchemy import Engine

from sqlshift.core.config import MigrateConfig
from sqlshift.sources import MemoryScriptSource
from sqlshift.store import HistoryRepository, StatementRepository, create_db_engine


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for tests."""
    return tmp_path / "test.db"


@pytest.fixture
def engine(test_db_path: Path) -> Engine:
    """Provide a file-backed SQLite engine."""
    eng = create_db_engine(f"sqlite:///{test_db_path}")
    yield eng
    eng.dispose()


@pytest.fixture
def source() -> MemoryScriptSource:
    """Provide an empty in-memory script source."""
    return MemoryScriptSource()


@pytest.fixture
def config() -> MigrateConfig:
    """Provide migration settings for the test app."""
    return MigrateConfig(app="test", base_dir="schema/svc")


@pytest.fixture
def history(engine: Engine) -> HistoryRepository:
    """Provide a HistoryRepository instance."""
    return HistoryRepository(engine)


@pytest.fixture
def statements(engine: Engine) -> StatementRepository:
    """Provide a StatementRepository instance."""
    return StatementRepository(engine)
