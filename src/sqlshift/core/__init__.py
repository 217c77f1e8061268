"""Core types, configuration and version ordering for sqlshift."""

from .config import Config, MigrateConfig
from .exceptions import (
    ConfigurationError,
    DatabaseError,
    DiscoveryError,
    PriorFailureError,
    ProvisioningError,
    ScriptReadError,
    SQLShiftError,
    StatementExecutionError,
)
from .types import (
    HistoryRecord,
    MigrationResult,
    MigrationStatus,
    Script,
    StatementRecord,
    split_statements,
)
from .version import (
    Ordering,
    compare_versions,
    pad_version,
    split_version,
    version_after,
    version_after_or_equal,
    version_sort_key,
)

__all__ = [
    "Config",
    "MigrateConfig",
    "SQLShiftError",
    "ConfigurationError",
    "DatabaseError",
    "ProvisioningError",
    "PriorFailureError",
    "DiscoveryError",
    "ScriptReadError",
    "StatementExecutionError",
    "Script",
    "HistoryRecord",
    "StatementRecord",
    "MigrationResult",
    "MigrationStatus",
    "split_statements",
    "Ordering",
    "compare_versions",
    "pad_version",
    "split_version",
    "version_after",
    "version_after_or_equal",
    "version_sort_key",
]
