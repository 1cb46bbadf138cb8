"""
Table endpoints.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db

from ..repositories import ListQuery
from ..services.domain import TableService
from ._common import Caller, admin_only, get_fields, get_list_query

router = APIRouter(prefix="/tables", tags=["tables"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_table(
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Create a table. Super Admin only."""
    return TableService(db).create(caller.permissions, body)


@router.get("")
def list_tables(
    query: ListQuery = Depends(get_list_query),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    return TableService(db).list_all(caller.permissions, query)


@router.get("/{table_id}")
def get_table(
    table_id: str,
    fields: list[str] | None = Depends(get_fields),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return TableService(db).get(caller.permissions, table_id, fields)


@router.patch("/{table_id}")
def update_table(
    table_id: str,
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return TableService(db).update(caller.permissions, table_id, body)


@router.delete("/{table_id}")
def delete_table(
    table_id: str,
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    TableService(db).delete(caller.permissions, table_id)
    return {}
