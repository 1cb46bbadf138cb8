"""
Product endpoints.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db

from ..repositories import ListQuery
from ..services.domain import ProductService
from ._common import Caller, admin_only, get_fields, get_list_query, parse_bool

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Create a product. Super Admin only."""
    return ProductService(db).create(caller.permissions, body)


@router.get("")
def list_products(
    is_active: str | None = Query(default=None, alias="isActive"),
    category: str | None = Query(default=None),
    query: ListQuery = Depends(get_list_query),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    """List products, optionally filtered by ``isActive`` and ``category``."""
    active = parse_bool(is_active)
    if active is not None:
        query.filters["isActive"] = active
    if category:
        query.filters["category"] = category
    return ProductService(db).list_all(caller.permissions, query)


@router.get("/{product_id}")
def get_product(
    product_id: str,
    fields: list[str] | None = Depends(get_fields),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return ProductService(db).get(caller.permissions, product_id, fields)


@router.patch("/{product_id}")
def update_product(
    product_id: str,
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return ProductService(db).update(caller.permissions, product_id, body)


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    ProductService(db).delete(caller.permissions, product_id)
    return {}
