"""Custom exceptions for sqlshift."""


class SQLShiftError(Exception):
    """Base exception for all sqlshift errors."""

    pass


class ConfigurationError(SQLShiftError):
    """Migration invoked with missing or invalid collaborators."""

    pass


class DatabaseError(SQLShiftError):
    """Database operation failed."""

    pass


class ProvisioningError(DatabaseError):
    """History tables could not be created."""

    pass


class PriorFailureError(SQLShiftError):
    """The latest history record for the app is marked failed."""

    def __init__(self, script: str, remark: str, record_id: int):
        """Initialize exception with the failed record details.

        Args:
            script: Script name of the failed record.
            remark: Stored error text of the failed attempt.
            record_id: Primary key of the record to fix manually.
        """
        self.script = script
        self.remark = remark
        self.record_id = record_id
        super().__init__(
            f"Previous schema migration failed, last attempt was '{script}' "
            f"({remark}); fix the schema manually and mark the 'schema_version' "
            f"record as successful (id: {record_id})"
        )


class DiscoveryError(SQLShiftError):
    """Script directory could not be listed."""

    def __init__(self, base_dir: str, reason: str):
        self.base_dir = base_dir
        self.reason = reason
        super().__init__(f"Failed to list scripts in {base_dir}: {reason}")


class ScriptReadError(SQLShiftError):
    """Script content could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read script {path}: {reason}")


class StatementExecutionError(SQLShiftError):
    """A statement of a migration script failed to execute."""

    def __init__(self, script: str, index: int, statement: str, reason: str):
        """Initialize exception with the failing statement.

        Args:
            script: Script name the statement belongs to.
            index: 1-based position of the statement within the script.
            statement: The SQL text that failed.
            reason: Driver error text.
        """
        self.script = script
        self.index = index
        self.statement = statement
        self.reason = reason
        super().__init__(
            f"Failed to execute statement #{index} of script {script}: {reason}"
        )
