"""Tests for history table provisioning and repositories."""

from pathlib import Path

import pytest
from sqlalchemy import Engine, inspect
from sqlalchemy.dialects import mysql, postgresql, sqlite

from sqlshift.core.exceptions import ConfigurationError, DatabaseError, ProvisioningError
from sqlshift.store import (
    HistoryRepository,
    StatementRepository,
    create_db_engine,
    ensure_tables,
    truncate_remark,
)
from sqlshift.store import schema
from sqlshift.store.models import schema_version


def table_names(engine: Engine) -> set[str]:
    return set(inspect(engine).get_table_names())


class TestEnsureTables:
    """Tests for ensure_tables()."""

    def test_creates_both_tables(self, engine: Engine):
        ensure_tables(engine)
        assert {"schema_version", "schema_script_sql"} <= table_names(engine)

    def test_statement_table_only_when_tracking(self, engine: Engine):
        ensure_tables(engine, track_statements=False)
        tables = table_names(engine)
        assert "schema_version" in tables
        assert "schema_script_sql" not in tables

    def test_is_idempotent(self, engine: Engine):
        ensure_tables(engine)
        ensure_tables(engine)
        assert {"schema_version", "schema_script_sql"} <= table_names(engine)

    def test_creates_indexes(self, engine: Engine):
        ensure_tables(engine)
        inspector = inspect(engine)
        version_indexes = {i["name"] for i in inspector.get_indexes("schema_version")}
        sql_indexes = {i["name"] for i in inspector.get_indexes("schema_script_sql")}

        assert "idx_schema_version_app" in version_indexes
        assert "idx_schema_script_sql_app_script" in sql_indexes

    def test_is_idempotent_without_index_if_not_exists(self, engine: Engine, monkeypatch):
        """Indexes are looked up first where CREATE INDEX cannot be guarded."""
        monkeypatch.setattr(schema, "INDEX_IF_NOT_EXISTS_DIALECTS", frozenset())

        ensure_tables(engine)
        ensure_tables(engine)

        indexes = {i["name"] for i in inspect(engine).get_indexes("schema_version")}
        assert "idx_schema_version_app" in indexes

    def test_failure_raises_provisioning_error(self, tmp_path: Path):
        # A directory cannot be opened as a SQLite database
        db_dir = tmp_path / "not_a_file"
        db_dir.mkdir()
        engine = create_db_engine(f"sqlite:///{db_dir}")

        with pytest.raises(ProvisioningError, match="schema_version"):
            ensure_tables(engine)
        engine.dispose()


class TestCreateDbEngine:
    """Tests for create_db_engine()."""

    def test_creates_parent_directories(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "schema.db"
        engine = create_db_engine(f"sqlite:///{db_path}")
        ensure_tables(engine)
        engine.dispose()
        assert db_path.exists()

    def test_invalid_url(self):
        with pytest.raises(ConfigurationError, match="Invalid database URL"):
            create_db_engine("not a url")


@pytest.fixture
def provisioned(engine: Engine) -> Engine:
    ensure_tables(engine)
    return engine


class TestHistoryRepository:
    """Tests for HistoryRepository."""

    def test_latest_without_history(self, provisioned, history: HistoryRepository):
        assert history.latest("test") is None
        assert history.count("test") == 0

    def test_latest_is_highest_id(self, provisioned, history: HistoryRepository):
        history.append("test", "v0.0.1.sql", True, "1 statement(s) executed")
        last_id = history.append("test", "v0.0.2.sql", False, "boom")

        latest = history.latest("test")

        assert latest.id == last_id
        assert latest.script == "v0.0.2.sql"
        assert latest.success is False
        assert latest.remark == "boom"
        assert latest.created_at is not None

    def test_apps_are_partitioned(self, provisioned, history: HistoryRepository):
        history.append("a", "v1.sql", True)
        history.append("b", "v2.sql", True)

        assert history.latest("a").script == "v1.sql"
        assert history.count("a") == 1
        assert history.count("c") == 0

    def test_remark_is_truncated(self, provisioned, history: HistoryRepository):
        history.append("test", "v1.sql", False, "é" * 300)
        assert history.latest("test").remark == "é" * 255

    def test_upsert_inserts_when_missing(self, provisioned, history: HistoryRepository):
        record_id = history.upsert("test", "v1.sql", True, "ok")
        assert history.latest("test").id == record_id
        assert history.count("test") == 1

    def test_upsert_updates_existing(self, provisioned, history: HistoryRepository):
        first = history.append("test", "v1.sql", True, "1 statement(s) executed")

        second = history.upsert("test", "v1.sql", False, "syntax error")

        assert second == first
        assert history.count("test") == 1
        latest = history.latest("test")
        assert latest.success is False
        assert latest.remark == "syntax error"

    def test_list_for_app_newest_first(self, provisioned, history: HistoryRepository):
        for name in ("v1.sql", "v2.sql", "v3.sql"):
            history.append("test", name, True)

        records = history.list_for_app("test", limit=2)

        assert [r.script for r in records] == ["v3.sql", "v2.sql"]

    def test_mark_success(self, provisioned, history: HistoryRepository):
        record_id = history.append("test", "v1.sql", False, "boom")

        assert history.mark_success(record_id, "fixed by hand")
        assert not history.mark_success(record_id + 100)

        latest = history.latest("test")
        assert latest.success is True
        assert latest.remark == "fixed by hand"

    def test_missing_table_raises_database_error(self, engine: Engine):
        with pytest.raises(DatabaseError, match="schema_version"):
            HistoryRepository(engine).latest("test")


class TestStatementRepository:
    """Tests for StatementRepository."""

    def test_record_and_list(self, provisioned, statements: StatementRepository):
        statements.record("test", "v1.sql", "SELECT 1")
        statements.record("test", "v1.sql", "SELECT 2")
        statements.record("test", "v2.sql", "SELECT 3")
        statements.record("other", "v1.sql", "SELECT 4")

        assert statements.list_statements("test", "v1.sql") == ["SELECT 1", "SELECT 2"]

    def test_record_many(self, provisioned, statements: StatementRepository):
        statements.record_many("test", "v1.sql", ["SELECT 1", "SELECT 1"])
        statements.record_many("test", "v1.sql", [])

        records = statements.list_records("test", "v1.sql")
        assert [r.sql_script for r in records] == ["SELECT 1", "SELECT 1"]
        assert records[0].id < records[1].id


def test_truncate_remark():
    assert truncate_remark("x" * 256) == "x" * 255
    assert truncate_remark("short") == "short"


class TestCreateIndexDdl:
    """Tests for create_index_ddl()."""

    @pytest.fixture
    def app_index(self):
        return next(i for i in schema_version.indexes if i.name == "idx_schema_version_app")

    def test_mysql_has_no_if_not_exists(self, app_index):
        ddl = schema.create_index_ddl(app_index, mysql.dialect())
        sql = str(ddl.compile(dialect=mysql.dialect()))

        assert "IF NOT EXISTS" not in sql
        assert sql.startswith("CREATE INDEX idx_schema_version_app ON schema_version")

    @pytest.mark.parametrize("dialect", [sqlite.dialect(), postgresql.dialect()])
    def test_guarded_where_supported(self, app_index, dialect):
        sql = str(schema.create_index_ddl(app_index, dialect).compile(dialect=dialect))
        assert "CREATE INDEX IF NOT EXISTS idx_schema_version_app" in sql
