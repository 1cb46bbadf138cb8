"""
Domain Services.

Usage:
    from pos_api.services.domain import OrderService

    orders = OrderService(db).list_all(ctx, query)
"""

from .token_service import TokenService
from .admin_service import AdminService
from .table_service import TableService
from .category_service import CategoryService
from .product_service import ProductService
from .order_service import OrderService, validate_order
from .seed_service import SEED_ADMINS, seed_admins

__all__ = [
    "TokenService",
    "AdminService",
    "TableService",
    "CategoryService",
    "ProductService",
    "OrderService",
    "validate_order",
    "SEED_ADMINS",
    "seed_admins",
]
