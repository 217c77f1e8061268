"""Migration entry point.

Example:
    from sqlshift.core.config import MigrateConfig
    from sqlshift.services import migrate_schema
    from sqlshift.sources import FileSystemScriptSource
    from sqlshift.store import create_db_engine

    engine = create_db_engine("sqlite:///app.db")
    result = migrate_schema(
        engine,
        MigrateConfig(app="svc", base_dir="schema/svc"),
        FileSystemScriptSource("."),
    )
    print(f"Executed {result.statements_executed} statement(s)")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..core.exceptions import ConfigurationError, PriorFailureError
from ..core.types import MigrationResult
from ..store.repositories import HistoryRepository, StatementRepository
from ..store.schema import ensure_tables
from .execution import ScriptExecutor
from .selection import ScriptSelector

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from ..app.protocols import HistoryStoreProtocol, LoggerProtocol, StatementStoreProtocol
    from ..core.config import MigrateConfig
    from ..core.types import HistoryRecord
    from ..sources.base import ScriptSource

INITIALIZED_REMARK = "initialized: baseline set without executing scripts"


class Migrator:
    """Applies pending scripts for one app.

    One invocation: provision history tables, refuse to run past a failed
    record, take the first-run shortcut for an app without history, and
    otherwise execute the selected scripts in version order.
    """

    def __init__(
        self,
        engine: "Engine",
        config: "MigrateConfig",
        source: "ScriptSource",
        log: "LoggerProtocol" = logger,
        history: "HistoryStoreProtocol | None" = None,
        statements: "StatementStoreProtocol | None" = None,
    ):
        """Initialize the migrator.

        Args:
            engine: Engine for the target database.
            config: Invocation settings.
            source: Where scripts are read from.
            log: Logger for progress narration.
            history: History store, defaults to the SQLAlchemy repository.
            statements: Statement store, defaults to the SQLAlchemy repository.

        Raises:
            ConfigurationError: If a collaborator or required setting is missing.
        """
        if engine is None:
            raise ConfigurationError("A database engine is required")
        if source is None:
            raise ConfigurationError("A script source is required")
        if log is None:
            raise ConfigurationError("A logger is required")
        if config is None:
            raise ConfigurationError("A migration config is required")
        if not config.app:
            raise ConfigurationError("An application identifier is required")
        if not config.base_dir:
            raise ConfigurationError("A script base directory is required")

        self.engine = engine
        self.config = config
        self.source = source
        self.log = log
        self.history = history if history is not None else HistoryRepository(engine)
        self.statements = statements
        if self.statements is None and config.track_statements:
            self.statements = StatementRepository(engine)
        self.selector = ScriptSelector(source, config, log)

    @property
    def app(self) -> str:
        return self.config.app

    def run(self) -> MigrationResult:
        """Run the migration.

        Returns:
            MigrationResult describing what was executed.

        Raises:
            ProvisioningError: If the history tables cannot be created.
            PriorFailureError: If the latest record for the app failed.
            DiscoveryError: If the script directory cannot be listed.
            ScriptReadError: If a script cannot be read.
            StatementExecutionError: If a statement fails.
        """
        ensure_tables(self.engine, self.config.track_statements)

        latest = self.history.latest(self.app)
        self._check_gate(latest)

        if latest is None:
            return self._initialize()

        selection = self.selector.select(latest.script)
        result = MigrationResult(app=self.app, baseline=selection.baseline)
        if not selection.scripts:
            self.log.info(f"Schema of {self.app!r} is up to date at {selection.baseline}")
            return result

        executor = ScriptExecutor(
            self.engine,
            self.history,
            self.statements,
            self.app,
            track_statements=self.config.track_statements,
            log=self.log,
        )
        result.executed, result.statements_executed = executor.run(selection)

        self.log.info(
            f"Migrated {self.app!r}: {len(result.executed)} script(s), "
            f"{result.statements_executed} statement(s) executed"
        )
        return result

    def _check_gate(self, latest: "HistoryRecord | None") -> None:
        if latest is not None and not latest.success:
            self.log.error(
                f"Previous migration of {latest.script} failed "
                f"(schema_version id {latest.id}): {latest.remark}"
            )
            raise PriorFailureError(latest.script, latest.remark, latest.id)

    def _initialize(self) -> MigrationResult:
        """Record the newest script as applied without executing anything.

        A schema provisioned from scratch is assumed current; migrations only
        bring existing deployments forward.
        """
        result = MigrationResult(app=self.app)
        target = self.selector.latest(self.selector.discover())
        if target is None:
            self.log.info(f"No scripts found for {self.app!r}, nothing to initialize")
            return result

        name = target.name.lower()
        script = self.selector.load(target) if self.config.track_statements else None

        self.history.append(self.app, name, True, INITIALIZED_REMARK)
        if script is not None:
            # Seed statements so later additions to this script are detected
            self.statements.record_many(self.app, name, list(script.statements))

        self.log.info(f"Initialized schema history of {self.app!r} at {name}")
        result.baseline = name
        result.initialized = True
        return result


def migrate_schema(
    engine: "Engine",
    config: "MigrateConfig",
    source: "ScriptSource",
    log: "LoggerProtocol" = logger,
) -> MigrationResult:
    """Apply pending migration scripts for ``config.app``.

    Args:
        engine: Engine for the target database.
        config: Invocation settings.
        source: Where scripts are read from.
        log: Logger for progress narration.

    Returns:
        MigrationResult describing what was executed.
    """
    return Migrator(engine, config, source, log).run()
