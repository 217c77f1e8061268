"""Protocol definitions for sqlshift collaborators.

Services depend on these interfaces rather than on the SQLAlchemy
repositories, which keeps the engine free of SQL dialect concerns and lets
tests substitute in-memory fakes.

Example:
    class MyHistory:
        def latest(self, app: str) -> HistoryRecord | None: ...
        def count(self, app: str) -> int: ...
        def append(self, app, script, success, remark="") -> int: ...
        def upsert(self, app, script, success, remark="") -> int: ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..core.types import HistoryRecord


@runtime_checkable
class HistoryStoreProtocol(Protocol):
    """Durable record of script outcomes per app."""

    def latest(self, app: str) -> HistoryRecord | None:
        """Record with the highest id for the app."""
        ...

    def count(self, app: str) -> int:
        """Number of records for the app."""
        ...

    def append(self, app: str, script: str, success: bool, remark: str = "") -> int:
        """Insert a record."""
        ...

    def upsert(self, app: str, script: str, success: bool, remark: str = "") -> int:
        """Update the record for (app, script) or insert one."""
        ...


@runtime_checkable
class StatementStoreProtocol(Protocol):
    """Durable record of statements attempted per (app, script)."""

    def record(self, app: str, script: str, statement: str) -> int:
        ...

    def record_many(self, app: str, script: str, statements: list[str]) -> None:
        ...

    def list_statements(self, app: str, script: str) -> list[str]:
        ...


@runtime_checkable
class LoggerProtocol(Protocol):
    """Leveled logger; loguru's ``logger`` satisfies it."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, message: str, *args: Any, **kwargs: Any) -> None: ...
