"""
Admin endpoints: registration, sessions, self-service and management.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session

from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter

from ..repositories import ListQuery
from ..schemas import LoginRequest
from ..services.domain import AdminService
from ._common import (
    Caller,
    admin_only,
    get_fields,
    get_list_query,
    guest_only,
    registration_guard,
)

router = APIRouter(prefix="/admins", tags=["admins"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.post("", status_code=status.HTTP_201_CREATED)
def register(
    request: Request,
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(registration_guard),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Create an account. Returns ``{admin, token}``."""
    return AdminService(db).register(caller.permissions, body, ip_address=_client_ip(request))


@router.post("/login")
@limiter.limit(settings.login_rate_limit)
def login(
    request: Request,
    body: LoginRequest,
    caller: Caller = Depends(guest_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Open a new session. Returns ``{admin, token}``."""
    return AdminService(db).login(body.email, body.password, ip_address=_client_ip(request))


@router.post("/logout")
def logout(
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Revoke the token used for this request."""
    AdminService(db).logout(caller.admin, caller.token)
    return {}


@router.post("/logout-all")
def logout_all(
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Revoke every session of the caller."""
    AdminService(db).logout_all(caller.admin)
    return {}


@router.get("/me")
def read_me(
    fields: list[str] | None = Depends(get_fields),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return AdminService(db).me(caller.admin, fields)


@router.patch("/me")
def update_me(
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return AdminService(db).update_me(caller.admin, body)


@router.delete("/me")
def delete_me(
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    AdminService(db).delete_me(caller.admin)
    return {}


@router.get("")
def list_admins(
    query: ListQuery = Depends(get_list_query),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    return AdminService(db).list_all(caller.permissions, query)


@router.get("/{admin_id}")
def get_admin(
    admin_id: str,
    fields: list[str] | None = Depends(get_fields),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return AdminService(db).get(caller.permissions, admin_id, fields)


@router.patch("/{admin_id}")
def update_admin(
    admin_id: str,
    body: dict[str, Any] = Body(...),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    return AdminService(db).update(caller.permissions, admin_id, body)


@router.delete("/{admin_id}")
def delete_admin(
    admin_id: str,
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    AdminService(db).delete(caller.permissions, admin_id)
    return {}
