"""Type definitions for sqlshift."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

STATEMENT_SEPARATOR = ";"


def split_statements(content: str) -> list[str]:
    """Split script text on statement boundaries.

    Segments are trimmed and empty segments discarded.
    """
    statements = []
    for segment in content.split(STATEMENT_SEPARATOR):
        segment = segment.strip()
        if segment:
            statements.append(segment)
    return statements


@dataclass(frozen=True)
class Script:
    """A versioned SQL migration script.

    Attributes:
        name: Lower-cased file name, used as label and version key.
        path: Location of the script inside its source.
        statements: SQL statements in file order.
    """

    name: str
    path: str
    statements: tuple[str, ...] = ()

    @classmethod
    def from_content(cls, name: str, path: str, content: str) -> "Script":
        """Build a script from its raw text."""
        return cls(name=name.lower(), path=path, statements=tuple(split_statements(content)))


@dataclass
class HistoryRecord:
    """One row of the schema_version table."""

    id: int
    app: str
    script: str
    success: bool
    remark: str = ""
    created_at: Optional[datetime] = None


@dataclass
class StatementRecord:
    """One row of the schema_script_sql table."""

    id: int
    app: str
    script: str
    sql_script: str
    created_at: Optional[datetime] = None


@dataclass
class MigrationResult:
    """Outcome of a migration run.

    Attributes:
        app: Application the run was partitioned by.
        baseline: Effective baseline the run started from.
        executed: Names of scripts that ran statements, in order.
        statements_executed: Total number of statements executed.
        initialized: True when the first-run shortcut recorded a baseline
            instead of executing scripts.
    """

    app: str
    baseline: Optional[str] = None
    executed: list[str] = field(default_factory=list)
    statements_executed: int = 0
    initialized: bool = False

    @property
    def changed(self) -> bool:
        """Whether the run wrote any schema change."""
        return self.statements_executed > 0


@dataclass
class MigrationStatus:
    """Read-only view of an app's migration state."""

    app: str
    latest: Optional[HistoryRecord]
    history_count: int
    pending: list[str] = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        """True if a failed record prevents further migrations."""
        return self.latest is not None and not self.latest.success

    @property
    def initialized(self) -> bool:
        """True once the app has any history."""
        return self.history_count > 0
