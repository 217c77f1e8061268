"""SQLAlchemy ORM models for the migration history tables.

These models use SQLAlchemy 2.0 style with Mapped[] type annotations and are
only used for their table definitions; repositories issue Core statements.
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

REMARK_MAX_LENGTH = 255

# SQLite only autoincrements INTEGER PRIMARY KEY columns
_Id = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    """Base class for all ORM models in sqlshift."""

    pass


class SchemaVersionModel(Base):
    """One attempt at applying a script for an app.

    The row with the highest id for an app is the app's current state.
    """

    __tablename__ = "schema_version"
    __table_args__ = (Index("idx_schema_version_app", "app"),)

    id: Mapped[int] = mapped_column(_Id, primary_key=True, autoincrement=True)
    app: Mapped[str] = mapped_column(String(50), nullable=False, server_default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.current_timestamp()
    )
    script: Mapped[str] = mapped_column(String(256), nullable=False, server_default="")
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    remark: Mapped[str] = mapped_column(
        String(REMARK_MAX_LENGTH + 1), nullable=False, server_default=""
    )


class SchemaScriptSqlModel(Base):
    """One statement attempted while applying a script for an app."""

    __tablename__ = "schema_script_sql"
    __table_args__ = (Index("idx_schema_script_sql_app_script", "app", "script"),)

    id: Mapped[int] = mapped_column(_Id, primary_key=True, autoincrement=True)
    app: Mapped[str] = mapped_column(String(50), nullable=False, server_default="")
    script: Mapped[str] = mapped_column(String(256), nullable=False, server_default="")
    sql_script: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.current_timestamp()
    )


schema_version = SchemaVersionModel.__table__
schema_script_sql = SchemaScriptSqlModel.__table__
