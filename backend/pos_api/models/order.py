"""
Order model.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, DocumentMixin


class Order(DocumentMixin, Base):
    """
    An order taken by an admin against a table.

    ``admin``, ``table`` and ``category`` hold ids of other collections.
    ``products`` is the embedded list of line items, each
    ``{"_id", "product", "price", "count"}``.
    """

    __tablename__ = "pos_order"

    admin: Mapped[str] = mapped_column("admin_id", String(32), nullable=False, index=True)
    table: Mapped[str] = mapped_column("table_id", String(32), nullable=False, index=True)
    category: Mapped[str] = mapped_column("category_id", String(32), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    payment_type: Mapped[Optional[str]] = mapped_column(String(16))
    products: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
