"""Application-level interfaces for sqlshift."""

from .protocols import HistoryStoreProtocol, LoggerProtocol, StatementStoreProtocol

__all__ = [
    "HistoryStoreProtocol",
    "StatementStoreProtocol",
    "LoggerProtocol",
]
