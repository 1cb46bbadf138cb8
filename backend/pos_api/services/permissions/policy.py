"""
Declarative role policy.

One table answers "may this role perform this action on this resource", one
more answers "which rows of this resource may this role see". No handler
carries its own role logic.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Final, Mapping

from shared.config.constants import (
    ALL_ADMIN_ROLES,
    MANAGEMENT_ROLES,
    SUPER_ADMIN_ONLY,
    Roles,
)


class Resource(str, Enum):
    """Resource collections (value is the human-readable name)."""

    ADMIN = "admin"
    TABLE = "table"
    CATEGORY = "category"
    PRODUCT = "product"
    ORDER = "order"


class Action(Enum):
    """Available actions for permission checks."""

    CREATE = auto()
    READ = auto()
    LIST = auto()
    UPDATE = auto()
    DELETE = auto()


def _catalog_rules() -> dict[Action, frozenset[str]]:
    return {
        Action.CREATE: SUPER_ADMIN_ONLY,
        Action.READ: ALL_ADMIN_ROLES,
        Action.LIST: ALL_ADMIN_ROLES,
        Action.UPDATE: SUPER_ADMIN_ONLY,
        Action.DELETE: SUPER_ADMIN_ONLY,
    }


PERMISSIONS: Final[Mapping[Resource, Mapping[Action, frozenset[str]]]] = {
    Resource.TABLE: _catalog_rules(),
    Resource.CATEGORY: _catalog_rules(),
    Resource.PRODUCT: _catalog_rules(),
    Resource.ORDER: {
        Action.CREATE: ALL_ADMIN_ROLES,
        Action.READ: ALL_ADMIN_ROLES,
        Action.LIST: ALL_ADMIN_ROLES,
        Action.UPDATE: MANAGEMENT_ROLES,
        Action.DELETE: SUPER_ADMIN_ONLY,
    },
    # Self-service (/me) operations are not gated here
    Resource.ADMIN: {
        Action.CREATE: ALL_ADMIN_ROLES,
        Action.READ: ALL_ADMIN_ROLES,
        Action.LIST: ALL_ADMIN_ROLES,
        Action.UPDATE: ALL_ADMIN_ROLES,
        Action.DELETE: ALL_ADMIN_ROLES,
    },
}


# resource -> role -> wire field forced to the caller's id on list/read
ROW_SCOPES: Final[Mapping[Resource, Mapping[str, str]]] = {
    Resource.ORDER: {Roles.CASHIER: "admin"},
}


def is_allowed(resource: Resource, action: Action, role: str | None) -> bool:
    """Evaluate the permission table. Unknown roles are always denied."""
    if role is None:
        return False
    return role in PERMISSIONS.get(resource, {}).get(action, frozenset())


def row_scope(resource: Resource, role: str | None) -> str | None:
    """Wire field that must equal the caller's id for ``role``, if any."""
    if role is None:
        return None
    return ROW_SCOPES.get(resource, {}).get(role)
