"""
Credential store: persistence of admins and their password hashes.

The store never writes a plaintext password: whenever the ``password``
attribute changed since the record was loaded, it is validated and hashed on
save.
"""

from __future__ import annotations

from sqlalchemy import inspect, select

from shared.config.constants import Messages
from shared.config.logging import get_logger
from shared.security.password import (
    hash_password,
    needs_rehash,
    validate_password,
    verify_password,
)
from shared.utils.exceptions import NotFoundError

from ..models import Admin, AdminToken
from .base import DocumentRepository

logger = get_logger(__name__)


class AdminRepository(DocumentRepository[Admin]):
    model = Admin

    def _hash_if_changed(self, admin: Admin) -> None:
        state = inspect(admin)
        if state.transient or state.pending or state.attrs.password.history.has_changes():
            validate_password(admin.password)
            admin.password = hash_password(admin.password)

    def create(self, admin: Admin) -> Admin:
        """Insert a new admin; a duplicate email raises IntegrityError."""
        self._hash_if_changed(admin)
        return self.insert(admin)

    def save(self, admin: Admin) -> Admin:
        self._hash_if_changed(admin)
        return super().save(admin)

    def find_by_email(self, email: str) -> Admin | None:
        return self.find_one(email=email.strip().lower())

    def find_by_credentials(self, email: str | None, password: str | None) -> Admin:
        """
        Look up an admin by email and password.

        Unknown email, missing input and a wrong password all raise the same
        NotFoundError.

        Raises:
            NotFoundError: If no account matches.
        """
        if not email or not password:
            raise NotFoundError(message=Messages.BAD_CREDENTIALS)

        admin = self.find_by_email(email)
        if admin is None or not verify_password(password, admin.password):
            logger.debug("Credential lookup failed", email_found=admin is not None)
            raise NotFoundError(message=Messages.BAD_CREDENTIALS)

        if needs_rehash(admin.password):
            logger.info("Rehashing password with current cost factor", admin_id=admin.id)
            admin.password = password
            self.save(admin)

        return admin

    def find_by_token(self, admin_id: str, token: str) -> Admin | None:
        """Find the admin only if ``token`` is in its live allow-list."""
        stmt = (
            select(Admin)
            .join(AdminToken, AdminToken.admin_id == Admin.id)
            .where(Admin.id == admin_id, AdminToken.token == token)
            .limit(1)
        )
        return self._db.scalar(stmt)
