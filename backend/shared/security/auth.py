"""
Bearer token primitives.

Tokens are HS256 JWTs whose subject is the admin id. A token that decodes is
not yet a valid session: the caller must also find it in the admin's live
token allow-list (see pos_api.services.domain.token_service).

Every failure raises the same generic AuthorizationError; the reason is only
logged.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from typing import Any

import jwt

from shared.config.settings import (
    JWT_SECRET,
    JWT_ISSUER,
    JWT_AUDIENCE,
    settings,
)
from shared.config.logging import get_logger
from shared.utils.exceptions import AuthorizationError

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def token_fingerprint(token: str) -> str:
    """
    Short SHA256 prefix of a token, safe to log.
    """
    return hashlib.sha256(token.encode()).hexdigest()[:8]


def sign_token(admin_id: str, ttl_seconds: int | None = None) -> str:
    """
    Sign a session token for an admin.

    Each token carries a unique ``jti`` so two sessions opened in the same
    second still get distinct token strings.

    Args:
        admin_id: Subject of the token.
        ttl_seconds: Token lifetime. Defaults to ``jwt_token_expire_days``.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_token_expire_days * 24 * 60 * 60

    now = int(time.time())
    data = {
        "sub": admin_id,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(data, JWT_SECRET, algorithm="HS256")


def decode_token(token: str) -> dict[str, Any]:
    """
    Verify a token's signature, issuer, audience and expiry.

    Raises:
        AuthorizationError: If the token does not verify or has no subject.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.InvalidTokenError as e:
        logger.debug("Token validation failed", error=str(e), token_hash=token_fingerprint(token))
        raise AuthorizationError()

    if not isinstance(payload.get("sub"), str) or not payload["sub"]:
        logger.debug("Token without subject", token_hash=token_fingerprint(token))
        raise AuthorizationError()

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        AuthorizationError: If the header is missing or malformed.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthorizationError()
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthorizationError()
    return token
