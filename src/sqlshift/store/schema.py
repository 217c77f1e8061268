"""Provisioning of the history tables.

Tables are created with ``IF NOT EXISTS`` on every invocation. Indexes use
``IF NOT EXISTS`` where the dialect supports it for ``CREATE INDEX``; MySQL
does not, so there the index is only created when the inspector does not
report it yet.
"""

from loguru import logger
from sqlalchemy import Engine, Index, Table, inspect
from sqlalchemy.engine import Dialect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateIndex, CreateTable

from ..core.exceptions import ProvisioningError
from .models import schema_script_sql, schema_version

# Dialects accepting CREATE INDEX IF NOT EXISTS
INDEX_IF_NOT_EXISTS_DIALECTS = frozenset({"sqlite", "postgresql"})


def history_tables(track_statements: bool = True) -> list[Table]:
    """Tables required for the given mode."""
    tables = [schema_version]
    if track_statements:
        tables.append(schema_script_sql)
    return tables


def create_index_ddl(index: Index, dialect: Dialect) -> CreateIndex:
    """CREATE INDEX construct for ``dialect``, guarded where supported."""
    return CreateIndex(index, if_not_exists=dialect.name in INDEX_IF_NOT_EXISTS_DIALECTS)


def ensure_tables(engine: Engine, track_statements: bool = True) -> None:
    """Create the history tables if they do not exist.

    Args:
        engine: Engine for the target database.
        track_statements: Also create the per-statement table.

    Raises:
        ProvisioningError: If a CREATE statement fails.
    """
    for table in history_tables(track_statements):
        try:
            with engine.begin() as conn:
                conn.execute(CreateTable(table, if_not_exists=True))
                for index in sorted(table.indexes, key=lambda i: i.name):
                    ddl = create_index_ddl(index, conn.dialect)
                    if ddl.if_not_exists or not inspect(conn).has_index(table.name, index.name):
                        conn.execute(ddl)
        except SQLAlchemyError as e:
            raise ProvisioningError(f"Failed to create {table.name} table: {e}") from e
        logger.debug(f"Table {table.name} ready")
