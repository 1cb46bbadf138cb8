"""
Catalog Models: Category, Product.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, DocumentMixin


class Category(DocumentMixin, Base):
    """Menu category."""

    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)


class Product(DocumentMixin, Base):
    """
    Menu product. ``category`` holds the category id; it is not a foreign key,
    dangling references hydrate to null.
    """

    __tablename__ = "product"

    category: Mapped[str] = mapped_column("category_id", String(32), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # Decimal kept as its submitted string
    price: Mapped[str] = mapped_column(String(32), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    minimum_ordered: Mapped[int] = mapped_column(Integer, nullable=False)
    maximum_ordered: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
