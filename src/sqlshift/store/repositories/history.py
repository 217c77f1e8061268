"""Schema version history operations for sqlshift."""

from __future__ import annotations

from loguru import logger
from sqlalchemy import Engine, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from ...core.exceptions import DatabaseError
from ...core.types import HistoryRecord
from ..models import REMARK_MAX_LENGTH, schema_version


def truncate_remark(remark: str) -> str:
    """Clip a remark to the column limit, counting characters."""
    return remark[:REMARK_MAX_LENGTH]


class HistoryRepository:
    """Repository for the schema_version table.

    Each write runs in its own transaction so a record survives a failure
    of whatever runs next.
    """

    def __init__(self, engine: Engine):
        """Initialize with database engine.

        Args:
            engine: Engine for the database holding the history tables.
        """
        self.engine = engine

    def latest(self, app: str) -> HistoryRecord | None:
        """Get the most recent record for an app.

        Args:
            app: Application identifier.

        Returns:
            Record with the highest id, or None if the app has no history.
        """
        stmt = (
            select(schema_version)
            .where(schema_version.c.app == app)
            .order_by(schema_version.c.id.desc())
            .limit(1)
        )
        try:
            with self.engine.connect() as conn:
                row = conn.execute(stmt).mappings().first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to read schema_version: {e}") from e
        return self._row_to_record(row) if row else None

    def count(self, app: str) -> int:
        """Count all records for an app."""
        stmt = select(func.count()).select_from(schema_version).where(
            schema_version.c.app == app
        )
        try:
            with self.engine.connect() as conn:
                return conn.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to count schema_version: {e}") from e

    def list_for_app(self, app: str, limit: int | None = None) -> list[HistoryRecord]:
        """List records for an app, newest first."""
        stmt = (
            select(schema_version)
            .where(schema_version.c.app == app)
            .order_by(schema_version.c.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to list schema_version: {e}") from e
        return [self._row_to_record(row) for row in rows]

    def append(self, app: str, script: str, success: bool, remark: str = "") -> int:
        """Insert a new record.

        Args:
            app: Application identifier.
            script: Script name.
            success: Outcome of the attempt.
            remark: Free text, truncated to 255 characters.

        Returns:
            Id of the inserted record.
        """
        stmt = insert(schema_version).values(
            app=app, script=script, success=success, remark=truncate_remark(remark)
        )
        try:
            with self.engine.begin() as conn:
                record_id = conn.execute(stmt).inserted_primary_key[0]
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save schema_version: {e}") from e

        logger.debug(
            f"schema_version appended: id={record_id}, app={app!r}, "
            f"script={script!r}, success={success}"
        )
        return record_id

    def upsert(self, app: str, script: str, success: bool, remark: str = "") -> int:
        """Update the newest record for (app, script), inserting if none exists.

        Returns:
            Id of the updated or inserted record.
        """
        remark = truncate_remark(remark)
        find = (
            select(schema_version.c.id)
            .where(schema_version.c.app == app, schema_version.c.script == script)
            .order_by(schema_version.c.id.desc())
            .limit(1)
        )
        try:
            with self.engine.begin() as conn:
                record_id = conn.execute(find).scalar()
                if record_id is None:
                    stmt = insert(schema_version).values(
                        app=app, script=script, success=success, remark=remark
                    )
                    record_id = conn.execute(stmt).inserted_primary_key[0]
                else:
                    conn.execute(
                        update(schema_version)
                        .where(schema_version.c.id == record_id)
                        .values(
                            success=success,
                            remark=remark,
                            created_at=func.current_timestamp(),
                        )
                    )
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save schema_version: {e}") from e

        logger.debug(
            f"schema_version upserted: id={record_id}, app={app!r}, "
            f"script={script!r}, success={success}"
        )
        return record_id

    def mark_success(self, record_id: int, remark: str | None = None) -> bool:
        """Mark a record successful after manual remediation.

        Args:
            record_id: Id of the record to resolve.
            remark: Optional replacement remark.

        Returns:
            True if a record was updated.
        """
        values: dict = {"success": True}
        if remark is not None:
            values["remark"] = truncate_remark(remark)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    update(schema_version)
                    .where(schema_version.c.id == record_id)
                    .values(**values)
                )
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to update schema_version: {e}") from e

        if result.rowcount:
            logger.info(f"schema_version record {record_id} marked successful")
        return bool(result.rowcount)

    def _row_to_record(self, row) -> HistoryRecord:
        """Convert a result row to a HistoryRecord."""
        return HistoryRecord(
            id=row["id"],
            app=row["app"],
            script=row["script"],
            success=bool(row["success"]),
            remark=row["remark"] or "",
            created_at=row["created_at"],
        )
