"""Execution of selected migration scripts.

Statements run one at a time, each in its own transaction, and the first
failure halts the whole run. Outcomes are written to the history tables as
the run progresses.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from loguru import logger
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from ..core.exceptions import DatabaseError, StatementExecutionError
from ..core.types import Script

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from ..app.protocols import HistoryStoreProtocol, LoggerProtocol, StatementStoreProtocol
    from .selection import Selection


def driver_message(error: Exception) -> str:
    """Error text reported by the DB driver, without SQLAlchemy decoration."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)
    return str(error)


def diff_statements(statements: tuple[str, ...], recorded: list[str]) -> list[tuple[int, str]]:
    """Statements not matched by a recorded statement.

    Recorded texts are a multiset: each recorded occurrence matches one
    occurrence in ``statements``.

    Returns:
        (1-based index, statement) pairs still to execute.
    """
    remaining = Counter(recorded)
    pending = []
    for index, statement in enumerate(statements, start=1):
        if remaining[statement] > 0:
            remaining[statement] -= 1
            continue
        pending.append((index, statement))
    return pending


class ScriptExecutor:
    """Runs scripts and records their outcomes.

    Example:
        executor = ScriptExecutor(engine, history, statements, app="svc")
        executed, count = executor.run(selection)
    """

    def __init__(
        self,
        engine: "Engine",
        history: "HistoryStoreProtocol",
        statements: "StatementStoreProtocol | None",
        app: str,
        track_statements: bool = True,
        log: "LoggerProtocol" = logger,
    ):
        """Initialize the executor.

        Args:
            engine: Engine the scripts run against.
            history: Store for per-script outcomes.
            statements: Store for per-statement records, required when
                ``track_statements`` is enabled.
            app: Application identifier.
            track_statements: Record statements and upsert history rows.
            log: Logger for progress narration.
        """
        if track_statements and statements is None:
            raise ValueError("statement store required when tracking statements")
        self.engine = engine
        self.history = history
        self.statements = statements
        self.app = app
        self.track_statements = track_statements
        self.log = log

    def run(self, selection: "Selection") -> tuple[list[str], int]:
        """Execute every script of the selection in order.

        Returns:
            Names of scripts that executed statements, and the total
            number of statements executed.

        Raises:
            StatementExecutionError: On the first failing statement.
        """
        executed: list[str] = []
        total = 0
        for script in selection.scripts:
            if selection.is_baseline(script):
                count = self.extend(script)
            else:
                count = self.apply(script)
            if count:
                executed.append(script.name)
                total += count
        return executed, total

    def apply(self, script: Script) -> int:
        """Execute all statements of a script not applied before."""
        self.log.info(f"Applying script {script.name} ({len(script.statements)} statement(s))")
        pending = list(enumerate(script.statements, start=1))
        count = self._execute_all(script, pending)
        self._save(script.name, True, f"{count} statement(s) executed")
        self.log.info(f"Script {script.name} executed")
        return count

    def extend(self, script: Script) -> int:
        """Execute only the statements added to an applied script.

        A script without statement records was applied before statements
        were tracked and is skipped entirely.

        Returns:
            Number of statements executed, 0 if nothing was new.
        """
        recorded = self.statements.list_statements(self.app, script.name)
        if not recorded:
            self.log.debug(f"Script {script.name} has no statement records, skipping")
            return 0

        pending = diff_statements(script.statements, recorded)
        if not pending:
            self.log.debug(f"Script {script.name} has no new statements")
            return 0

        self.log.info(f"Applying {len(pending)} new statement(s) of script {script.name}")
        count = self._execute_all(script, pending)
        self._save(script.name, True, f"{count} new statement(s) executed")
        self.log.info(f"Script {script.name} extended")
        return count

    def _execute_all(self, script: Script, pending: list[tuple[int, str]]) -> int:
        for index, statement in pending:
            if self.track_statements:
                self.statements.record(self.app, script.name, statement)
            try:
                self._execute(statement)
            except SQLAlchemyError as e:
                reason = driver_message(e)
                self.log.error(f"Statement #{index} of {script.name} failed: {reason}")
                try:
                    self._save(script.name, False, reason)
                except DatabaseError as save_error:
                    self.log.error(f"Failed to save schema_version: {save_error}")
                raise StatementExecutionError(script.name, index, statement, reason) from e
        return len(pending)

    def _execute(self, statement: str) -> None:
        # No parameters: "%" in script SQL must not be read as a placeholder
        with self.engine.begin() as conn:
            conn.exec_driver_sql(statement, execution_options={"no_parameters": True})

    def _save(self, script: str, success: bool, remark: str) -> int:
        if self.track_statements:
            return self.history.upsert(self.app, script, success, remark)
        return self.history.append(self.app, script, success, remark)
