"""Status and resolve commands for sqlshift CLI."""

from ...core.config import Config
from ...core.types import MigrationStatus
from ...services import get_status
from ...sources import source_from_uri
from ...store import HistoryRepository, create_db_engine, ensure_tables
from .common import apply_overrides


def handle_status(args, config: Config) -> None:
    """Handle status command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    config = apply_overrides(args, config)
    engine = create_db_engine(config.db_url)
    try:
        migrate_config = config.to_migrate_config()
        status = get_status(engine, migrate_config, source_from_uri(config.source))
        records = HistoryRepository(engine).list_for_app(config.app, limit=args.limit)
    finally:
        engine.dispose()

    _print_status(status)
    if records:
        print()
        print("Recent history:")
        for record in records:
            mark = "✓" if record.success else "✗"
            print(f"  {mark} #{record.id} {record.script} {record.created_at} {record.remark}")


def handle_resolve(args, config: Config) -> None:
    """Handle resolve command: mark a failed record successful.

    Args:
        args: Parsed command arguments.
        config: Application configuration.

    Raises:
        ValueError: If no such record exists.
    """
    config = apply_overrides(args, config)
    engine = create_db_engine(config.db_url)
    try:
        ensure_tables(engine, track_statements=False)
        updated = HistoryRepository(engine).mark_success(args.record_id, args.remark)
    finally:
        engine.dispose()

    if not updated:
        raise ValueError(f"No schema_version record with id {args.record_id}")
    print(f"✓ Record {args.record_id} marked successful")


def _print_status(status: MigrationStatus) -> None:
    """Print status information.

    Args:
        status: MigrationStatus object to display.
    """
    print(f"sqlshift status: {status.app}")
    print("=" * 50)
    print(f"History records: {status.history_count}")
    if status.latest is None:
        print("Latest: none (next run records a baseline)")
    else:
        state = "ok" if status.latest.success else "FAILED"
        print(f"Latest: {status.latest.script} [{state}] (id: {status.latest.id})")
        if status.latest.remark:
            print(f"Remark: {status.latest.remark}")

    if status.blocked:
        print()
        print("Migrations are blocked until the failed record is resolved.")
    elif status.pending:
        print()
        print("Pending scripts:")
        for name in status.pending:
            print(f"  • {name}")
    elif status.initialized:
        print("Up to date.")
