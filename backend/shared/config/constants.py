"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, UserTypes, OrderStatus

    if admin.role == Roles.CASHIER:
        ...
"""

from typing import Final


# =============================================================================
# Admin Roles
# =============================================================================


class Roles:
    """Admin role constants (stored verbatim on the admin record)."""

    SUPER_ADMIN: Final[str] = "Super Admin"
    ADMIN: Final[str] = "Admin"
    CASHIER: Final[str] = "Cashier"

    ALL: Final[tuple[str, ...]] = (SUPER_ADMIN, ADMIN, CASHIER)


# Role groups for common access patterns
ALL_ADMIN_ROLES: Final[frozenset[str]] = frozenset(Roles.ALL)
MANAGEMENT_ROLES: Final[frozenset[str]] = frozenset({Roles.SUPER_ADMIN, Roles.ADMIN})
SUPER_ADMIN_ONLY: Final[frozenset[str]] = frozenset({Roles.SUPER_ADMIN})


# =============================================================================
# Caller classes (the ``userType`` query parameter)
# =============================================================================


class UserTypes:
    """Caller-class selectors understood by the authorization guard."""

    GUEST: Final[str] = "guest"
    ADMIN: Final[str] = "admin"

    ALL: Final[tuple[str, ...]] = (GUEST, ADMIN)


# =============================================================================
# Entity Status Constants
# =============================================================================


class OrderStatus:
    """Order status constants."""

    ORDERED: Final[str] = "Ordered"
    PAID: Final[str] = "Paid"
    CANCELLED: Final[str] = "Cancelled"
    REFUNDED: Final[str] = "Refunded"

    ALL: Final[tuple[str, ...]] = (ORDERED, PAID, CANCELLED, REFUNDED)


class PaymentType:
    """Order payment type constants."""

    MIXED: Final[str] = "Mixed"
    CASH: Final[str] = "Cash"
    CARD: Final[str] = "Card"

    ALL: Final[tuple[str, ...]] = (MIXED, CASH, CARD)


class Gender:
    MALE: Final[str] = "Male"
    FEMALE: Final[str] = "Female"

    ALL: Final[tuple[str, ...]] = (MALE, FEMALE)


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Validation limits."""

    MIN_LINE_ITEM_COUNT: Final[int] = 1

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_URL_LENGTH: Final[int] = 2048

    # Identifiers are 32 lowercase hex characters
    ID_LENGTH: Final[int] = 32


# =============================================================================
# Client-facing messages
# =============================================================================


class Messages:
    """Generic messages returned to clients."""

    NOT_AUTHORIZED: Final[str] = "You aren't authorized to perform this action."
    UNEXPECTED: Final[str] = "An unexpected error has occurred."
    BAD_CREDENTIALS: Final[str] = (
        "We couldn't find an account with that email and password combination."
    )
    TOO_MANY_REQUESTS: Final[str] = "Too many requests. Please try again later."
