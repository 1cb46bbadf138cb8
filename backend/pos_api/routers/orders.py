"""
Order endpoints.

Cashiers only ever list their own orders, whatever ``admin`` filter they send.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db

from ..repositories import ListQuery
from ..services.domain import OrderService
from ._common import Caller, admin_only, get_fields, get_list_query

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return OrderService(db).create(caller.permissions, body)


@router.get("")
def list_orders(
    category: str | None = Query(default=None),
    admin: str | None = Query(default=None),
    query: ListQuery = Depends(get_list_query),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    if category:
        query.filters["category"] = category
    if admin:
        query.filters["admin"] = admin
    return OrderService(db).list_all(caller.permissions, query)


@router.get("/{order_id}")
def get_order(
    order_id: str,
    fields: list[str] | None = Depends(get_fields),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return OrderService(db).get(caller.permissions, order_id, fields)


@router.patch("/{order_id}")
def update_order(
    order_id: str,
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Update status / paymentType / products. Not available to cashiers."""
    return OrderService(db).update(caller.permissions, order_id, body)


@router.delete("/{order_id}")
def delete_order(
    order_id: str,
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    OrderService(db).delete(caller.permissions, order_id)
    return {}
