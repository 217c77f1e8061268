"""Arguments shared by sqlshift commands."""

import argparse

from ...core.config import Config


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add database, app and script location arguments."""
    parser.add_argument("-a", "--app", help="Application identifier (default: $SQLSHIFT_APP)")
    parser.add_argument("-u", "--url", help="Database URL (default: $SQLSHIFT_DB_URL)")
    parser.add_argument(
        "-s",
        "--source",
        help="Script source: directory, file:// or package:// URI (default: .)",
    )
    parser.add_argument(
        "-d", "--dir", dest="base_dir", help="Script directory inside the source"
    )


def apply_overrides(args: argparse.Namespace, config: Config) -> Config:
    """Apply command-line values over the loaded configuration."""
    if getattr(args, "app", None):
        config.app = args.app
    if getattr(args, "url", None):
        config.db_url = args.url
    if getattr(args, "source", None):
        config.source = args.source
    if getattr(args, "base_dir", None):
        config.base_dir = args.base_dir
    if getattr(args, "start_version", None):
        config.start_version = args.start_version
    if getattr(args, "exclude", None):
        config.excluded = list(config.excluded) + list(args.exclude)
    if getattr(args, "no_track_statements", False):
        config.track_statements = False
    return config
