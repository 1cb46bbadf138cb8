"""
Permission Context - Main entry point for permission checks.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from shared.config.logging import get_logger
from shared.utils.exceptions import AuthorizationError

from .policy import Action, Resource, is_allowed, row_scope

if TYPE_CHECKING:
    from ...models import Admin

logger = get_logger(__name__)


class PermissionContext:
    """
    Context for performing permission checks on behalf of one admin.

    Usage:
        ctx = PermissionContext(admin)

        ctx.require(Action.DELETE, Resource.CATEGORY)

        filters = ctx.scope_filters(Resource.ORDER, {"admin": requested_id})
    """

    def __init__(self, admin: "Admin | None"):
        self._admin = admin

    @property
    def admin(self) -> "Admin | None":
        return self._admin

    @property
    def admin_id(self) -> str | None:
        return self._admin.id if self._admin is not None else None

    @property
    def role(self) -> str | None:
        return self._admin.role if self._admin is not None else None

    def can(self, action: Action, resource: Resource) -> bool:
        return is_allowed(resource, action, self.role)

    def require(self, action: Action, resource: Resource) -> None:
        """
        Raises:
            AuthorizationError: If the role may not perform ``action``.
        """
        if not self.can(action, resource):
            logger.debug(
                "Permission denied",
                admin_id=self.admin_id,
                role=self.role,
                action=action.name,
                resource=resource.value,
            )
            raise AuthorizationError(action=action.name, resource=resource.value)

    def scope_filters(self, resource: Resource, filters: dict[str, Any]) -> dict[str, Any]:
        """
        Apply row-level scoping: for scoped roles the scope field is forced
        to the caller's id, whatever was requested.
        """
        field = row_scope(resource, self.role)
        if field is None:
            return filters
        return {**filters, field: self.admin_id}
