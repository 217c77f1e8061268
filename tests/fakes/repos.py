"""In-memory store fakes for testing.

These implementations allow testing services without history tables.
Each fake implements the corresponding protocol from sqlshift.app.protocols.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlshift.core.types import HistoryRecord
from sqlshift.store.repositories.history import truncate_remark


@dataclass
class InMemoryHistoryStore:
    """In-memory schema_version fake."""

    records: list[HistoryRecord] = field(default_factory=list)

    def _next_id(self) -> int:
        return max((r.id for r in self.records), default=0) + 1

    def latest(self, app: str) -> HistoryRecord | None:
        rows = [r for r in self.records if r.app == app]
        return max(rows, key=lambda r: r.id) if rows else None

    def count(self, app: str) -> int:
        return sum(1 for r in self.records if r.app == app)

    def append(self, app: str, script: str, success: bool, remark: str = "") -> int:
        record = HistoryRecord(
            id=self._next_id(),
            app=app,
            script=script,
            success=success,
            remark=truncate_remark(remark),
        )
        self.records.append(record)
        return record.id

    def upsert(self, app: str, script: str, success: bool, remark: str = "") -> int:
        matches = [r for r in self.records if r.app == app and r.script == script]
        if not matches:
            return self.append(app, script, success, remark)
        record = max(matches, key=lambda r: r.id)
        record.success = success
        record.remark = truncate_remark(remark)
        return record.id


@dataclass
class InMemoryStatementStore:
    """In-memory schema_script_sql fake."""

    rows: list[tuple[str, str, str]] = field(default_factory=list)

    def record(self, app: str, script: str, statement: str) -> int:
        self.rows.append((app, script, statement))
        return len(self.rows)

    def record_many(self, app: str, script: str, statements: list[str]) -> None:
        for statement in statements:
            self.record(app, script, statement)

    def list_statements(self, app: str, script: str) -> list[str]:
        return [s for a, sc, s in self.rows if a == app and sc == script]


@dataclass
class RecordingLogger:
    """Logger fake capturing messages per level."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def _log(self, level: str, message: str, *args: Any) -> None:
        self.messages.append((level, message.format(*args) if args else message))

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log("debug", message, *args)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log("info", message, *args)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log("warning", message, *args)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log("error", message, *args)

    def at(self, level: str) -> list[str]:
        """Messages logged at ``level``."""
        return [m for lvl, m in self.messages if lvl == level]
