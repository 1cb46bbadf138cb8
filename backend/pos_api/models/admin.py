"""
Admin (staff identity) and its live session tokens.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, DocumentMixin, new_id, utcnow


class Admin(DocumentMixin, Base):
    """
    A staff account with one role (Super Admin, Admin, Cashier).
    ``password`` only ever holds a bcrypt hash once persisted.
    """

    __tablename__ = "admin"

    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    phone_number: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    gender: Mapped[Optional[str]] = mapped_column(String(16))
    birthdate: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # Live session allow-list
    tokens: Mapped[list["AdminToken"]] = relationship(
        back_populates="admin",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, email='{self.email}', role='{self.role}')>"


class AdminToken(Base):
    """One live session token of an admin."""

    __tablename__ = "admin_token"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    admin_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("admin.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    admin: Mapped["Admin"] = relationship(back_populates="tokens")
