"""
Closed error taxonomy and the single classifier that turns any failure into a
client-safe response.

Usage:
    from shared.utils.exceptions import NotFoundError, ValidationError, classify

    raise NotFoundError("product")
    raise ValidationError({"products": "Products can't be empty."})

    response = classify(error, admin_id=admin.id)
    response.to_payload()  # {"message": ..., "statusCode": ..., "errors": ...}

Client messages never carry the acting admin id; it only prefixes the log line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

import httpx
from fastapi import status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError

from shared.config.constants import Messages
from shared.config.settings import settings


class ErrorKind(str, Enum):
    """Every failure is exactly one of these kinds."""

    CLIENT = "ClientError"
    FILE = "FileError"
    VALIDATION = "ValidationError"
    DUPLICATE_KEY = "DuplicateKeyError"
    AUTHORIZATION = "AuthorizationError"
    NOT_FOUND = "NotFoundError"
    SERVER = "ServerError"
    PAYMENT_GATEWAY = "PaymobError"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.CLIENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FILE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_KEY: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHORIZATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.SERVER: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.PAYMENT_GATEWAY: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


# =============================================================================
# Field naming helpers
# =============================================================================


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def field_words(key: str) -> str:
    """``phoneNumber`` / ``phone_number`` -> ``phone number``."""
    spaced = _CAMEL_BOUNDARY.sub(" ", key.lstrip("_")).replace("_", " ")
    return " ".join(spaced.lower().split())


def field_label(key: str) -> str:
    """``phoneNumber`` -> ``Phone number``."""
    words = field_words(key)
    return words[:1].upper() + words[1:]


def invalid_fields_message(fields: Sequence[str]) -> str:
    noun = "field" if len(fields) == 1 else "fields"
    return (
        "The information you've entered is invalid for the following "
        f"{noun}: {', '.join(fields)}."
    )


# =============================================================================
# Error types
# =============================================================================


class AppError(Exception):
    """
    Base of the closed taxonomy.

    Attributes:
        kind: The ErrorKind this error classifies as.
        message: Client-safe message.
        errors: Optional per-field messages (field -> message).
        log_context: Extra data logged server-side only.
    """

    kind: ErrorKind = ErrorKind.SERVER
    default_message: str = Messages.UNEXPECTED

    def __init__(
        self,
        message: str | None = None,
        errors: Mapping[str, str] | None = None,
        **log_context: Any,
    ):
        self.message = message or self.default_message
        self.errors = dict(errors) if errors else None
        self.log_context = log_context
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class ClientError(AppError):
    """Malformed or otherwise unacceptable input (400)."""

    kind = ErrorKind.CLIENT
    default_message = "The request you've sent is invalid."


class TooManyRequestsError(ClientError):
    """Rate limit exceeded; a client error answered with 429."""

    default_message = Messages.TOO_MANY_REQUESTS

    @property
    def status_code(self) -> int:
        return status.HTTP_429_TOO_MANY_REQUESTS


class FileError(AppError):
    """Unacceptable uploaded file (400)."""

    kind = ErrorKind.FILE
    default_message = "The file you've uploaded is invalid."


class ValidationError(AppError):
    """
    One message per invalid field (400).

    Usage:
        raise ValidationError({"name": "Name can't be blank."})
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, errors: Mapping[str, str], **log_context: Any):
        super().__init__(invalid_fields_message(list(errors)), errors, **log_context)


class DuplicateKeyError(AppError):
    """
    Unique constraint conflict on one or more fields (400).

    Usage:
        raise DuplicateKeyError(["email"])
    """

    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, fields: Sequence[str], **log_context: Any):
        errors = {
            name: f"The {field_words(name)} you've entered is already taken."
            for name in fields
        }
        super().__init__(invalid_fields_message(list(errors)), errors, **log_context)


class AuthorizationError(AppError):
    """
    Any authorization failure (401).

    The message is deliberately generic, it never says why access was refused.
    """

    kind = ErrorKind.AUTHORIZATION
    default_message = Messages.NOT_AUTHORIZED


class NotFoundError(AppError):
    """
    Missing resource (404).

    Usage:
        raise NotFoundError("order")
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str | None = None, message: str | None = None, **log_context: Any):
        if message is None:
            message = (
                f"We couldn't find the {resource} you are looking for."
                if resource
                else "We couldn't find what you are looking for."
            )
        super().__init__(message, resource=resource, **log_context)


class ServerError(AppError):
    """Unexpected failure (500). Detail stays in the server log."""

    kind = ErrorKind.SERVER


# =============================================================================
# Conversions from third-party failures
# =============================================================================


_REQUEST_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})


def validation_error_from_pydantic(errors: Sequence[Mapping[str, Any]]) -> ValidationError:
    """
    Build a ValidationError from pydantic error dicts.

    Only the first message per top-level field is kept. Request errors carry
    a leading location segment (``body``, ``query``, ...), which is dropped.
    """
    messages: dict[str, str] = {}
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        name = str(loc[0]) if loc else "body"
        if name in messages:
            continue
        error_type = err.get("type")
        if error_type == "missing":
            messages[name] = f"{field_label(name)} can't be blank."
        elif error_type == "value_error":
            messages[name] = str(err.get("msg", "")).removeprefix("Value error, ")
        else:
            messages[name] = f"The {field_words(name)} you've entered is invalid."
    return ValidationError(messages)


_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: ([\w., ]+)")
_POSTGRES_UNIQUE = re.compile(r"Key \(([^)]+)\)=")


def duplicate_fields(error: IntegrityError) -> list[str] | None:
    """
    Derive the violated unique fields from a driver error.

    SQLite reports ``UNIQUE constraint failed: table.column``; PostgreSQL
    reports ``Key (column)=(value) already exists``. Column names are returned
    in wire (camelCase) form. Returns None when the error is not a unique
    constraint violation.
    """
    text = str(error.orig)

    match = _SQLITE_UNIQUE.search(text)
    if match:
        columns = [part.strip().split(".")[-1] for part in match.group(1).split(",")]
        return [to_camel(column) for column in columns if column]

    match = _POSTGRES_UNIQUE.search(text)
    if match:
        return [to_camel(column.strip()) for column in match.group(1).split(",")]

    return None


def _payment_gateway_response(error: BaseException) -> httpx.Response | None | bool:
    """
    Return the gateway response (or True without one) when ``error`` came
    from a call to the configured payment gateway, otherwise False.
    """
    if not isinstance(error, (httpx.HTTPStatusError, httpx.RequestError)):
        return False
    try:
        url = str(error.request.url)
    except RuntimeError:
        return False
    if not url.startswith(settings.payment_gateway_url):
        return False
    if isinstance(error, httpx.HTTPStatusError):
        return error.response
    return True


# =============================================================================
# Classifier
# =============================================================================


@dataclass(frozen=True)
class ErrorResponse:
    """Outcome of classifying a failure."""

    kind: ErrorKind
    status_code: int
    message: str
    errors: dict[str, str] | None = None
    log_message: str = ""
    log_level: int = logging.DEBUG
    log_extra: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message, "statusCode": self.status_code}
        if self.errors:
            payload["errors"] = self.errors
        return payload


def _prefixed(admin_id: str | None, message: str) -> str:
    return f"[{admin_id}] {message}" if admin_id else message


def _to_app_error(error: BaseException) -> AppError | None:
    """Map known third-party failures onto the taxonomy."""
    if isinstance(error, AppError):
        return error
    if isinstance(error, RequestValidationError):
        return validation_error_from_pydantic(error.errors())
    if isinstance(error, PydanticValidationError):
        return validation_error_from_pydantic(error.errors())
    if isinstance(error, IntegrityError):
        fields = duplicate_fields(error)
        if fields:
            return DuplicateKeyError(fields)
        return None
    if isinstance(error, RateLimitExceeded):
        return TooManyRequestsError(limit=str(error.detail))
    return None


def classify(error: BaseException, admin_id: str | None = None) -> ErrorResponse:
    """
    Classify any failure into (status code, client message, log detail).

    Known errors keep their message and per-field detail and log at debug
    level. Everything else answers with the generic 500 message and logs the
    full stack at error level; failures of payment gateway calls are labeled
    PaymobError in the log together with the gateway's response body.
    """
    app_error = _to_app_error(error)

    if app_error is not None and app_error.kind not in (ErrorKind.SERVER, ErrorKind.PAYMENT_GATEWAY):
        return ErrorResponse(
            kind=app_error.kind,
            status_code=app_error.status_code,
            message=app_error.message,
            errors=app_error.errors,
            log_message=_prefixed(admin_id, f"{app_error.kind.value}: {app_error.message}"),
            log_level=logging.DEBUG,
            log_extra={**app_error.log_context, **({"errors": app_error.errors} if app_error.errors else {})},
        )

    kind = ErrorKind.SERVER
    log_extra: dict[str, Any] = dict(app_error.log_context) if app_error is not None else {}

    gateway = _payment_gateway_response(error)
    if gateway is not False:
        kind = ErrorKind.PAYMENT_GATEWAY
        if isinstance(gateway, httpx.Response):
            log_extra["gateway_response"] = gateway.text

    return ErrorResponse(
        kind=kind,
        status_code=STATUS_CODES[kind],
        message=Messages.UNEXPECTED,
        errors=None,
        log_message=_prefixed(admin_id, f"{kind.value}: {type(error).__name__}: {error}"),
        log_level=logging.ERROR,
        log_extra=log_extra,
    )
