"""
Dining table model.
"""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, DocumentMixin


class Table(DocumentMixin, Base):
    """A table orders are placed against."""

    __tablename__ = "dining_table"

    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
