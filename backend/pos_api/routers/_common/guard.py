"""
Authorization guard: the single point where bearer tokens are checked.

Every route declares which caller classes (``userType`` query parameter) it
accepts. Any failure on the admin path raises the same generic
AuthorizationError, the reason only reaches the debug log.

Usage:
    @router.get("/tables")
    def list_tables(caller: Caller = Depends(admin_only)):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from shared.config.constants import UserTypes
from shared.config.logging import get_logger
from shared.infrastructure.db import get_db
from shared.security.auth import get_bearer_token
from shared.utils.exceptions import AuthorizationError

from ...models import Admin
from ...repositories import AdminRepository
from ...services.domain import TokenService
from ...services.permissions import PermissionContext

logger = get_logger(__name__)


@dataclass
class Caller:
    """Who is calling: the caller class and, for admins, the identity and raw token."""

    user_type: str
    admin: Admin | None = None
    token: str | None = None

    @property
    def permissions(self) -> PermissionContext:
        return PermissionContext(self.admin)


def authorize_request(
    request: Request,
    allowed: frozenset[str],
    user_type: str | None,
    authorization: str | None,
    db: Session,
) -> Caller:
    """
    Resolve the caller of a request.

    Raises:
        AuthorizationError: Caller class not allowed, missing or malformed
            bearer token, token rejected, or admin not found.
    """
    if user_type == UserTypes.GUEST:
        if UserTypes.GUEST not in allowed:
            logger.debug("Guest not allowed", path=request.url.path)
            raise AuthorizationError()
        return Caller(user_type=UserTypes.GUEST)

    if user_type != UserTypes.ADMIN or UserTypes.ADMIN not in allowed:
        logger.debug("Caller class not allowed", user_type=user_type, path=request.url.path)
        raise AuthorizationError()

    token = get_bearer_token(authorization)
    admin = TokenService(db).verify(token)

    request.state.admin = admin
    request.state.admin_id = admin.id
    request.state.token = token
    return Caller(user_type=UserTypes.ADMIN, admin=admin, token=token)


class AuthorizationGuard:
    """FastAPI dependency accepting the given caller classes."""

    def __init__(self, *allowed: str):
        self.allowed = frozenset(allowed)

    def __call__(
        self,
        request: Request,
        user_type: str | None = Query(default=None, alias="userType"),
        authorization: str | None = Header(default=None),
        db: Session = Depends(get_db),
    ) -> Caller:
        return authorize_request(request, self.allowed, user_type, authorization, db)


admin_only = AuthorizationGuard(UserTypes.ADMIN)
guest_only = AuthorizationGuard(UserTypes.GUEST)


def registration_guard(
    request: Request,
    user_type: str | None = Query(default=None, alias="userType"),
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> Caller:
    """
    Admin-only, except while no account exists: the very first registration
    needs no token.
    """
    if AdminRepository(db).count() == 0:
        logger.info("Bootstrap registration")
        return Caller(user_type=user_type or UserTypes.GUEST)
    return admin_only(request, user_type, authorization, db)
