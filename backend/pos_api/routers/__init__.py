"""
API routers, mounted under ``/api/v1``.
"""

from fastapi import APIRouter

from .admins import router as admins_router
from .categories import router as categories_router
from .orders import router as orders_router
from .products import router as products_router
from .tables import router as tables_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(admins_router)
api_router.include_router(tables_router)
api_router.include_router(categories_router)
api_router.include_router(products_router)
api_router.include_router(orders_router)

__all__ = ["api_router"]
