"""SQL helpers shared by tests."""

from sqlalchemy import Engine, text

BOOKKEEPING = ("schema_version", "schema_script_sql", "sqlite_master", "PRAGMA")


def script_sql(captured: list[str]) -> list[str]:
    """Captured statements that did not touch the history tables."""
    return [s for s in captured if not any(word in s for word in BOOKKEEPING)]


def count_rows(engine: Engine, table: str) -> int:
    with engine.connect() as conn:
        return conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()


def has_table(engine: Engine, table: str) -> bool:
    with engine.connect() as conn:
        row = conn.execute(
            text("SELECT name FROM sqlite_master WHERE type='table' AND name = :name"),
            {"name": table},
        ).first()
    return row is not None
