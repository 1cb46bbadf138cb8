"""
Category endpoints.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db

from ..repositories import ListQuery
from ..services.domain import CategoryService
from ._common import Caller, admin_only, get_fields, get_list_query, parse_bool

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Create a category. Super Admin only."""
    return CategoryService(db).create(caller.permissions, body)


@router.get("")
def list_categories(
    is_active: str | None = Query(default=None, alias="isActive"),
    query: ListQuery = Depends(get_list_query),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    """List categories, optionally filtered by ``isActive``."""
    active = parse_bool(is_active)
    if active is not None:
        query.filters["isActive"] = active
    return CategoryService(db).list_all(caller.permissions, query)


@router.get("/{category_id}")
def get_category(
    category_id: str,
    fields: list[str] | None = Depends(get_fields),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return CategoryService(db).get(caller.permissions, category_id, fields)


@router.patch("/{category_id}")
def update_category(
    category_id: str,
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Update description / isActive. Super Admin only."""
    return CategoryService(db).update(caller.permissions, category_id, body)


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    CategoryService(db).delete(caller.permissions, category_id)
    return {}
