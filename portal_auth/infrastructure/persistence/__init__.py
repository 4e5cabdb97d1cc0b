"""Relational persistence (SQLAlchemy async)."""

from portal_auth.infrastructure.persistence.base import BaseModel, BaseMutableModel
from portal_auth.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "BaseMutableModel", "Database"]
