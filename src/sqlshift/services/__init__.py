"""Migration services for sqlshift."""

from .execution import ScriptExecutor, diff_statements, driver_message
from .migrate import INITIALIZED_REMARK, Migrator, migrate_schema
from .selection import ScriptSelector, Selection, resolve_baseline
from .status import get_status

__all__ = [
    "ScriptExecutor",
    "diff_statements",
    "driver_message",
    "Migrator",
    "migrate_schema",
    "INITIALIZED_REMARK",
    "ScriptSelector",
    "Selection",
    "resolve_baseline",
    "get_status",
]
