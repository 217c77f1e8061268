"""Test fakes for testing without real infrastructure.

Example:
    from tests.fakes import InMemoryHistoryStore, InMemoryStatementStore

    migrator = Migrator(
        engine,
        config,
        source,
        history=InMemoryHistoryStore(),
        statements=InMemoryStatementStore(),
    )
"""

from .repos import InMemoryHistoryStore, InMemoryStatementStore, RecordingLogger

__all__ = [
    "InMemoryHistoryStore",
    "InMemoryStatementStore",
    "RecordingLogger",
]
