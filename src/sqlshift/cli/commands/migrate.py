"""Migrate command for sqlshift CLI."""

import argparse

from ...core.config import Config
from ...services import migrate_schema
from ...sources import source_from_uri
from ...store import create_db_engine
from .common import apply_overrides


def add_migrate_arguments(parser: argparse.ArgumentParser) -> None:
    """Add migrate-specific arguments."""
    parser.add_argument(
        "--start-version",
        help="Treat scripts up to this version as already applied",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Script file name to skip (repeatable)",
    )
    parser.add_argument(
        "--no-track-statements",
        action="store_true",
        help="Do not record individual statements",
    )


def handle_migrate(args, config: Config) -> None:
    """Handle migrate command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    config = apply_overrides(args, config)
    engine = create_db_engine(config.db_url)
    try:
        result = migrate_schema(engine, config.to_migrate_config(), source_from_uri(config.source))
    finally:
        engine.dispose()

    if result.initialized:
        print(f"✓ Initialized {result.app} at {result.baseline} (no scripts executed)")
    elif result.executed:
        print(f"✓ Migrated {result.app}: {result.statements_executed} statement(s)")
        for name in result.executed:
            print(f"  • {name}")
    else:
        print(f"✓ {result.app} is up to date")
