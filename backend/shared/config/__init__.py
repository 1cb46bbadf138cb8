"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, DATABASE_URL
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    Roles,
    UserTypes,
    OrderStatus,
    PaymentType,
    Limits,
    Messages,
    MANAGEMENT_ROLES,
)

__all__ = [
    # settings
    "settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Roles",
    "UserTypes",
    "OrderStatus",
    "PaymentType",
    "Limits",
    "Messages",
    "MANAGEMENT_ROLES",
]
