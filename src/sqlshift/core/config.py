"""Configuration management for sqlshift."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import toml
from loguru import logger

from .exceptions import ConfigurationError

DEFAULT_SUFFIXES = (".sql",)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class MigrateConfig:
    """Settings for a single migration invocation.

    Attributes:
        app: Application identifier partitioning the shared history tables.
        base_dir: Directory inside the script source holding the scripts.
        start_version: Optional caller-supplied baseline version.
        excluded: Lower-cased script names never considered.
        suffixes: Recognised script file suffixes.
        track_statements: Record each executed statement so scripts that
            gain statements can be re-applied incrementally.
    """

    app: str
    base_dir: str
    start_version: Optional[str] = None
    excluded: frozenset[str] = frozenset()
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES
    track_statements: bool = True

    def __post_init__(self) -> None:
        # Names are matched lower-cased, like discovered script names
        object.__setattr__(
            self, "excluded", frozenset(name.lower() for name in self.excluded)
        )

    def is_excluded(self, name: str) -> bool:
        """Check whether a script name is excluded."""
        return name.lower() in self.excluded


def _default_db_url() -> str:
    """Get default database URL."""
    data_dir = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return f"sqlite:///{data_dir / 'sqlshift' / 'schema.db'}"


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass
class Config:
    """Main application configuration."""

    db_url: str = field(default_factory=_default_db_url)
    app: str = ""
    source: str = "."  # Script source URI, bare paths are filesystem roots
    base_dir: str = "migrations"
    start_version: Optional[str] = None
    excluded: list[str] = field(default_factory=list)
    track_statements: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML file.

        Returns:
            Config with file values and environment overrides applied.

        Raises:
            ConfigurationError: If the file is not valid TOML.
        """
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
        try:
            data = toml.loads(content)
        except toml.TomlDecodeError as e:
            raise ConfigurationError(f"Invalid configuration file {path}: {e}") from e
        logger.debug(f"Configuration file loaded: {path}")

        config = cls()
        for key in ("db_url", "app", "source", "base_dir", "start_version"):
            if key in data:
                setattr(config, key, str(data[key]))
        if "excluded" in data:
            config.excluded = [str(name) for name in data["excluded"]]
        if "track_statements" in data:
            config.track_statements = _parse_bool(data["track_statements"])

        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Optional[Path] = None) -> "Config":
        """Load from ``path`` or ``SQLSHIFT_CONFIG`` if set, else from env."""
        if path is None and (env_path := os.environ.get("SQLSHIFT_CONFIG")):
            path = Path(env_path)
        if path is not None:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_env(self) -> None:
        if url := os.environ.get("SQLSHIFT_DB_URL"):
            self.db_url = url
        if app := os.environ.get("SQLSHIFT_APP"):
            self.app = app
        if source := os.environ.get("SQLSHIFT_SOURCE"):
            self.source = source
        if base_dir := os.environ.get("SQLSHIFT_DIR"):
            self.base_dir = base_dir
        if start := os.environ.get("SQLSHIFT_START_VERSION"):
            self.start_version = start
        if excluded := os.environ.get("SQLSHIFT_EXCLUDE"):
            self.excluded = [name.strip() for name in excluded.split(",") if name.strip()]
        if (track := os.environ.get("SQLSHIFT_TRACK_STATEMENTS")) is not None:
            self.track_statements = _parse_bool(track)

    def to_migrate_config(self) -> MigrateConfig:
        """Build the per-invocation settings."""
        return MigrateConfig(
            app=self.app,
            base_dir=self.base_dir,
            start_version=self.start_version or None,
            excluded=frozenset(self.excluded),
            track_statements=self.track_statements,
        )
