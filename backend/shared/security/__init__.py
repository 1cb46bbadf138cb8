"""
Security module: token signing, password hashing, rate limiting.
"""

from shared.security.auth import (
    sign_token,
    decode_token,
    get_bearer_token,
    token_fingerprint,
)
from shared.security.password import (
    hash_password,
    verify_password,
    needs_rehash,
    validate_password,
)
from shared.security.rate_limit import limiter

__all__ = [
    # auth
    "sign_token",
    "decode_token",
    "get_bearer_token",
    "token_fingerprint",
    # password
    "hash_password",
    "verify_password",
    "needs_rehash",
    "validate_password",
    # rate limiting
    "limiter",
]
