"""
Token Service - session tokens with a server-side allow-list.

A token is valid only if it verifies cryptographically AND is present in its
admin's live token set, so logout and logout-all take effect immediately.

Usage:
    tokens = TokenService(db)
    token = tokens.issue(admin)
    admin = tokens.verify(token)
    tokens.revoke(admin, token)
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from shared.config.logging import audit_token_event, get_logger
from shared.security.auth import decode_token, sign_token, token_fingerprint
from shared.utils.exceptions import AuthorizationError

from ...models import Admin, AdminToken
from ...repositories import AdminRepository

logger = get_logger(__name__)


class TokenService:
    def __init__(self, db: Session):
        self._store = AdminRepository(db)

    def issue(self, admin: Admin) -> str:
        """Sign a new token and append it to the admin's live set."""
        token = sign_token(admin.id)
        admin.tokens.append(AdminToken(token=token))
        self._store.save(admin)
        audit_token_event("ISSUED", admin_id=admin.id, token_hash=token_fingerprint(token))
        return token

    def verify(self, token: str) -> Admin:
        """
        Resolve a token to its admin.

        Raises:
            AuthorizationError: Bad signature, expired, revoked, or the admin
                no longer exists. The caller cannot tell these apart.
        """
        payload = decode_token(token)
        admin = self._store.find_by_token(payload["sub"], token)
        if admin is None:
            audit_token_event("REJECTED", admin_id=payload["sub"], token_hash=token_fingerprint(token))
            raise AuthorizationError()
        return admin

    def revoke(self, admin: Admin, token: str) -> None:
        """Remove exactly one token from the live set."""
        admin.tokens = [t for t in admin.tokens if t.token != token]
        self._store.save(admin)
        audit_token_event("REVOKED", admin_id=admin.id, token_hash=token_fingerprint(token))

    def revoke_all(self, admin: Admin) -> None:
        admin.tokens = []
        self._store.save(admin)
        audit_token_event("REVOKED_ALL", admin_id=admin.id)
