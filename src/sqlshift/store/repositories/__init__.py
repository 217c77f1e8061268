"""Repository classes for the migration history tables."""

from .history import HistoryRepository, truncate_remark
from .statements import StatementRepository

__all__ = [
    "HistoryRepository",
    "StatementRepository",
    "truncate_remark",
]
