"""
Permission system: declarative role table plus a per-request context.

Usage:
    from pos_api.services.permissions import PermissionContext, Action, Resource

    ctx = PermissionContext(admin)
    ctx.require(Action.UPDATE, Resource.ORDER)
"""

from .policy import Action, Resource, PERMISSIONS, ROW_SCOPES, is_allowed, row_scope
from .context import PermissionContext

__all__ = [
    "Action",
    "Resource",
    "PERMISSIONS",
    "ROW_SCOPES",
    "is_allowed",
    "row_scope",
    "PermissionContext",
]
