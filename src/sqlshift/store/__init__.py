"""Storage layer for sqlshift history tables."""

from .database import create_db_engine
from .models import Base, SchemaScriptSqlModel, SchemaVersionModel
from .repositories import HistoryRepository, StatementRepository, truncate_remark
from .schema import ensure_tables, history_tables

__all__ = [
    "create_db_engine",
    "Base",
    "SchemaVersionModel",
    "SchemaScriptSqlModel",
    "HistoryRepository",
    "StatementRepository",
    "truncate_remark",
    "ensure_tables",
    "history_tables",
]
