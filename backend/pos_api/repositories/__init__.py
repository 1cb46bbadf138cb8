"""
Repository Pattern Implementation.
One repository per document collection.
"""

from .base import DEFAULT_SORT, DocumentRepository, ListQuery, SortSpec
from .admin import AdminRepository
from .table import TableRepository
from .catalog import CategoryRepository, ProductRepository
from .order import OrderRepository

__all__ = [
    "DEFAULT_SORT",
    "DocumentRepository",
    "ListQuery",
    "SortSpec",
    "AdminRepository",
    "TableRepository",
    "CategoryRepository",
    "ProductRepository",
    "OrderRepository",
]
