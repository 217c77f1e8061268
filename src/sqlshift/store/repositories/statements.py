"""Per-statement execution records for sqlshift."""

from __future__ import annotations

from sqlalchemy import Engine, insert, select
from sqlalchemy.exc import SQLAlchemyError

from ...core.exceptions import DatabaseError
from ...core.types import StatementRecord
from ..models import schema_script_sql


class StatementRepository:
    """Repository for the append-only schema_script_sql table."""

    def __init__(self, engine: Engine):
        """Initialize with database engine.

        Args:
            engine: Engine for the database holding the history tables.
        """
        self.engine = engine

    def record(self, app: str, script: str, statement: str) -> int:
        """Record that a statement is about to be executed.

        Committed on its own so the record survives a crash during the
        statement itself.

        Returns:
            Id of the inserted record.
        """
        stmt = insert(schema_script_sql).values(app=app, script=script, sql_script=statement)
        try:
            with self.engine.begin() as conn:
                return conn.execute(stmt).inserted_primary_key[0]
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save schema_script_sql: {e}") from e

    def record_many(self, app: str, script: str, statements: list[str]) -> None:
        """Record several statements in one transaction."""
        if not statements:
            return
        rows = [{"app": app, "script": script, "sql_script": s} for s in statements]
        try:
            with self.engine.begin() as conn:
                conn.execute(insert(schema_script_sql), rows)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save schema_script_sql: {e}") from e

    def list_statements(self, app: str, script: str) -> list[str]:
        """Get recorded statement texts for (app, script) in insertion order."""
        return [r.sql_script for r in self.list_records(app, script)]

    def list_records(self, app: str, script: str) -> list[StatementRecord]:
        """Get recorded statements for (app, script) in insertion order."""
        stmt = (
            select(schema_script_sql)
            .where(schema_script_sql.c.app == app, schema_script_sql.c.script == script)
            .order_by(schema_script_sql.c.id)
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to read schema_script_sql: {e}") from e
        return [
            StatementRecord(
                id=row["id"],
                app=row["app"],
                script=row["script"],
                sql_script=row["sql_script"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
