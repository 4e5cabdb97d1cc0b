"""Base model, mixins and column types for all database entities.

This module provides:
- UtcDateTime: timezone-aware timestamp column that always yields UTC
- BaseModel: base for ALL models (numeric id, created_at)
- TimestampMixin: adds updated_at
- BaseMutableModel: recommended base for mutable models

Domain entities do NOT inherit from these classes; repositories map
between models and entities.

Architecture:
    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at)
        │   ├── AccountModel
        │   ├── TenantModel
        │   └── RoleModel
        └── append-only models (LoginAttemptModel, OtpCodeModel,
            RefreshTokenModel, AuditLogModel, PermissionModel)
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import BigInteger, DateTime, Integer, func
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

# BIGINT primary keys; SQLite only auto-increments INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer, "sqlite")


class UtcDateTime(TypeDecorator[datetime]):
    """Timestamp column that stores and returns aware UTC datetimes.

    Drivers without native time zone support (SQLite) hand back naive
    values; those are read as UTC so that comparisons with
    ``datetime.now(UTC)`` in the application never mix aware and naive
    datetimes.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides:
    - id: numeric auto-increment primary key
    - created_at: insertion time (set by the database)
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        IdType,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime,
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary (for debugging/logging)."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class TimestampMixin:
    """Mixin for mutable models that track updates.

    Note:
        Use BaseMutableModel instead of combining this with BaseModel by hand.
    """

    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def to_dict(self) -> dict[str, Any]:
        """Extend BaseModel.to_dict() with updated_at."""
        data: dict[str, Any] = super().to_dict()  # type: ignore[misc]
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models.

    Provides id, created_at and updated_at with the mixin order fixed in
    one place.
    """

    __abstract__ = True
