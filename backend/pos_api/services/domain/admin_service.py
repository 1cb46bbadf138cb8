"""
Admin Service - staff accounts, sessions and self-service.

Business rules:
- The first account may register without a token and is always Super Admin;
  afterwards any admin may register accounts (role defaults to Cashier)
- Login failures never reveal whether the email exists
- An admin may always read, update (mutable fields) and delete itself
"""

from __future__ import annotations

from typing import Any, Sequence

from shared.config.constants import Roles
from shared.config.logging import audit_auth_event, get_logger
from shared.utils.exceptions import NotFoundError

from ...models import Admin
from ...repositories import AdminRepository
from ...schemas import AdminCreate, AdminOutput
from ..base_service import ResourceService
from ..permissions import Action, PermissionContext, Resource
from .token_service import TokenService

logger = get_logger(__name__)


class AdminService(ResourceService[Admin]):
    resource = Resource.ADMIN
    repository_class = AdminRepository
    create_schema = AdminCreate
    output_schema = AdminOutput
    mutable_fields = frozenset({"firstName", "lastName", "phoneNumber", "password"})

    def __init__(self, db):
        super().__init__(db)
        self._tokens = TokenService(db)

    @property
    def repo(self) -> AdminRepository:
        return self._repo

    # =========================================================================
    # Registration and sessions
    # =========================================================================

    def is_bootstrap(self) -> bool:
        """True while no admin account exists yet."""
        return self._repo.count() == 0

    def register(
        self,
        ctx: PermissionContext,
        data: dict[str, Any],
        ip_address: str | None = None,
    ) -> dict[str, Any]:
        """
        Create an account and open its first session.

        Returns:
            ``{"admin": <document>, "token": <token>}``
        """
        bootstrap = self.is_bootstrap()
        if not bootstrap:
            ctx.require(Action.CREATE, self.resource)

        role = Roles.SUPER_ADMIN if bootstrap else (data.get("role") or Roles.CASHIER)
        values = self._validate({**data, "role": role})
        admin = self._insert(Admin(**values))
        token = self._tokens.issue(admin)

        audit_auth_event(
            "REGISTER",
            admin_id=admin.id,
            email=admin.email,
            ip_address=ip_address,
            role=admin.role,
            registered_by=ctx.admin_id,
            bootstrap=bootstrap,
        )
        return {"admin": self.to_document(admin), "token": token}

    def login(
        self,
        email: str | None,
        password: str | None,
        ip_address: str | None = None,
    ) -> dict[str, Any]:
        """
        Open a new session. Existing sessions stay valid.

        Raises:
            NotFoundError: Generic bad-credentials error.
        """
        try:
            admin = self._repo.find_by_credentials(email, password)
        except NotFoundError:
            audit_auth_event("LOGIN", email=email, success=False, reason="bad_credentials", ip_address=ip_address)
            raise

        token = self._tokens.issue(admin)
        audit_auth_event("LOGIN", admin_id=admin.id, email=admin.email, ip_address=ip_address)
        return {"admin": self.to_document(admin), "token": token}

    def logout(self, admin: Admin, token: str) -> None:
        self._tokens.revoke(admin, token)
        audit_auth_event("LOGOUT", admin_id=admin.id, email=admin.email)

    def logout_all(self, admin: Admin) -> None:
        self._tokens.revoke_all(admin)
        audit_auth_event("LOGOUT_ALL", admin_id=admin.id, email=admin.email)

    # =========================================================================
    # Self-service
    # =========================================================================

    def me(self, admin: Admin, fields: Sequence[str] | None = None) -> dict[str, Any]:
        return self.to_document(admin, fields)

    def update_me(self, admin: Admin, changes: dict[str, Any]) -> dict[str, Any]:
        self.check_mutable(changes)
        self.apply_changes(admin, changes)
        admin = self._repo.save(admin)
        logger.info("Updated own account", admin_id=admin.id, fields=sorted(changes))
        return self.to_document(admin)

    def delete_me(self, admin: Admin) -> None:
        self._repo.delete(admin)
        audit_auth_event("DELETE_ACCOUNT", admin_id=admin.id, email=admin.email)

    def _insert(self, record: Admin) -> Admin:
        return self._repo.create(record)
