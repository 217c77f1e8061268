"""CLI entry point for sqlshift."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sqlshift",
        description="Apply versioned SQL scripts exactly once per application",
    )
    parser.add_argument("-v", "--version", action="version", version="%(prog)s 1.0.0")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="TOML configuration file (default: $SQLSHIFT_CONFIG)",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    migrate_parser = subparsers.add_parser("migrate", help="Apply pending scripts")
    commands.add_common_arguments(migrate_parser)
    commands.add_migrate_arguments(migrate_parser)

    status_parser = subparsers.add_parser("status", help="Show migration history status")
    commands.add_common_arguments(status_parser)
    status_parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=5,
        help="Number of history records to show (default: 5)",
    )

    resolve_parser = subparsers.add_parser(
        "resolve", help="Mark a failed history record as fixed"
    )
    commands.add_common_arguments(resolve_parser)
    resolve_parser.add_argument("record_id", type=int, help="schema_version record id")
    resolve_parser.add_argument("-m", "--remark", default=None, help="Replacement remark")

    return parser


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    try:
        config = Config.from_env_or_file(args.config)

        if args.command == "migrate":
            commands.handle_migrate(args, config)
        elif args.command == "status":
            commands.handle_status(args, config)
        elif args.command == "resolve":
            commands.handle_resolve(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
