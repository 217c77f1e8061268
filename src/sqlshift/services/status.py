"""Status reporting for an app's migration history."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..core.types import MigrationStatus
from ..store.repositories import HistoryRepository
from ..store.schema import ensure_tables
from .selection import ScriptSelector, resolve_baseline

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from ..core.config import MigrateConfig
    from ..sources.base import ScriptSource


def get_status(engine: "Engine", config: "MigrateConfig", source: "ScriptSource") -> MigrationStatus:
    """Describe the migration state of ``config.app`` without changing it.

    Pending scripts are those a run would execute from scratch; the
    baseline script diffed for new statements is not listed. An app without
    history has no pending scripts since its first run only records a
    baseline.

    Args:
        engine: Engine for the target database.
        config: Invocation settings.
        source: Where scripts are read from.

    Returns:
        MigrationStatus for the app.
    """
    ensure_tables(engine, config.track_statements)
    history = HistoryRepository(engine)

    latest = history.latest(config.app)
    count = history.count(config.app)

    pending: list[str] = []
    if latest is not None:
        selector = ScriptSelector(source, config)
        baseline = resolve_baseline(latest.script, config.start_version)
        after, _ = selector.partition(selector.discover(), baseline)
        pending = [entry.name.lower() for entry in after]

    logger.debug(
        f"Status of {config.app!r}: records={count}, "
        f"latest={latest.script if latest else None!r}, pending={len(pending)}"
    )
    return MigrationStatus(app=config.app, latest=latest, history_count=count, pending=pending)
