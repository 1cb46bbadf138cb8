"""
Shared router dependencies: authorization guard and list parameters.
"""

from .guard import (
    AuthorizationGuard,
    Caller,
    admin_only,
    authorize_request,
    guest_only,
    registration_guard,
)
from .listing import get_fields, get_list_query, parse_bool, parse_fields, parse_sort

__all__ = [
    "AuthorizationGuard",
    "Caller",
    "admin_only",
    "authorize_request",
    "guest_only",
    "registration_guard",
    "get_fields",
    "get_list_query",
    "parse_bool",
    "parse_fields",
    "parse_sort",
]
