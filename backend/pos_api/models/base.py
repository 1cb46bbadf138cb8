"""
Base class and DocumentMixin for all SQLAlchemy ORM models.

Each model is one document collection: opaque string ids, creation/update
timestamps maintained here (never by the caller) and no foreign keys between
collections.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from shared.config.constants import Limits

_ID_PATTERN = re.compile(rf"^[0-9a-f]{{{Limits.ID_LENGTH}}}$")


def new_id() -> str:
    """Generate a document identifier (32 lowercase hex characters)."""
    return uuid.uuid4().hex


def is_valid_id(value: object) -> bool:
    """Check that ``value`` is a syntactically valid document identifier."""
    return isinstance(value, str) and bool(_ID_PATTERN.match(value))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class DocumentMixin:
    """
    Identifier and timestamps shared by every collection.

    Fields added:
    - id: opaque document identifier
    - created_at, updated_at: maintained on insert/update
    """

    id: Mapped[str] = mapped_column(String(Limits.ID_LENGTH), primary_key=True, default=new_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"
