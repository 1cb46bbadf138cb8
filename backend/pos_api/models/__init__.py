"""
SQLAlchemy ORM Models Package.

- base: Base class, DocumentMixin, identifier helpers
- admin: Admin, AdminToken
- catalog: Category, Product
- table: Table
- order: Order
"""

from .base import Base, DocumentMixin, new_id, is_valid_id, utcnow
from .admin import Admin, AdminToken
from .catalog import Category, Product
from .table import Table
from .order import Order

__all__ = [
    "Base",
    "DocumentMixin",
    "new_id",
    "is_valid_id",
    "utcnow",
    "Admin",
    "AdminToken",
    "Category",
    "Product",
    "Table",
    "Order",
]
