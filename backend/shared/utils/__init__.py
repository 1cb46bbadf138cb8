"""
Utilities module: error taxonomy and classifier.
"""

from shared.utils.exceptions import (
    ErrorKind,
    AppError,
    ClientError,
    FileError,
    ValidationError,
    DuplicateKeyError,
    AuthorizationError,
    NotFoundError,
    ServerError,
    ErrorResponse,
    classify,
)

__all__ = [
    "ErrorKind",
    "AppError",
    "ClientError",
    "FileError",
    "ValidationError",
    "DuplicateKeyError",
    "AuthorizationError",
    "NotFoundError",
    "ServerError",
    "ErrorResponse",
    "classify",
]
