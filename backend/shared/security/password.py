"""
Password hashing utilities using bcrypt.

Passwords are validated before hashing and only ever stored as salted,
cost-factored bcrypt hashes.
"""

import bcrypt

from shared.config.settings import settings
from shared.utils.exceptions import ValidationError

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def validate_password(password: str | None) -> None:
    """
    Check a plain password before it is hashed.

    Raises:
        ValidationError: If the password is blank or shorter than the minimum length.
    """
    if not password:
        raise ValidationError({"password": "Password can't be blank."})
    if len(password) < settings.password_min_length:
        raise ValidationError(
            {
                "password": (
                    f"Your password must be at least {settings.password_min_length} "
                    "characters long."
                )
            }
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError({"password": "Your password must be at most 72 bytes long."})


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Returns:
        Hashed password string (includes salt and cost factor), e.g. ``$2b$12$...``
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Non-bcrypt values never verify, there is no plaintext fallback.
    """
    if not hashed_password.startswith(("$2a$", "$2b$", "$2y$")):
        return False

    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def needs_rehash(hashed_password: str) -> bool:
    """
    Check if a stored hash was produced with a different cost factor than the
    configured one (or is not a bcrypt hash at all).
    """
    parts = hashed_password.split("$")
    if len(parts) < 4 or not parts[2].isdigit():
        return True
    return int(parts[2]) != settings.bcrypt_rounds
