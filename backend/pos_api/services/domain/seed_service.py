"""
Development seed: one account per role, created only into an empty admin
collection.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.config.settings import settings

from ...models import Admin
from ...repositories import AdminRepository

logger = get_logger(__name__)

SEED_ADMINS: tuple[dict[str, str], ...] = (
    {
        "first_name": "Jessi",
        "last_name": "Hollander",
        "phone_number": "01007683940",
        "email": "superadmin@shababeek.com",
        "role": Roles.SUPER_ADMIN,
        "gender": "Female",
    },
    {
        "first_name": "Omar",
        "last_name": "Hassan",
        "phone_number": "01007683941",
        "email": "admin@shababeek.com",
        "role": Roles.ADMIN,
        "gender": "Male",
    },
    {
        "first_name": "Mona",
        "last_name": "Adel",
        "phone_number": "01007683942",
        "email": "cashier@shababeek.com",
        "role": Roles.CASHIER,
        "gender": "Female",
    },
)


def seed_admins(db: Session, password: str | None = None) -> list[Admin]:
    """
    Create the seed accounts if no admin exists.

    Returns:
        The created admins (empty when the collection was not empty).
    """
    store = AdminRepository(db)
    if store.count() > 0:
        logger.debug("Admin collection not empty, skipping seed")
        return []

    created = [
        store.create(Admin(**fields, password=password or settings.seed_password))
        for fields in SEED_ADMINS
    ]
    logger.info("Seeded admin accounts", count=len(created))
    return created
