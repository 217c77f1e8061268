"""Engine creation for sqlshift."""

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from ..core.exceptions import ConfigurationError


def create_db_engine(db_url: str, echo: bool = False) -> Engine:
    """Create an engine for ``db_url``.

    For file-backed SQLite URLs the parent directory is created.

    Args:
        db_url: SQLAlchemy database URL (e.g., "sqlite:///path/to/db.sqlite").
        echo: Log every SQL statement issued by the engine.

    Returns:
        Configured Engine.

    Raises:
        ConfigurationError: If the URL cannot be parsed.
    """
    try:
        url = make_url(db_url)
    except ArgumentError as e:
        raise ConfigurationError(f"Invalid database URL {db_url!r}: {e}") from e

    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(url, echo=echo)
