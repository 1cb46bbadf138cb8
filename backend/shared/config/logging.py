"""
Structured logging for the POS API.

Loggers accept keyword context next to the message:

    logger = get_logger(__name__)
    logger.info("Created order", document_id=order.id, admin_id=ctx.admin_id)

Production writes one JSON object per line; development writes colored,
human-readable lines. Every record emitted while a request is served carries
its X-Request-ID.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, "context", None) or {}


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    return request_id if request_id and request_id != "-" else None


class JsonFormatter(logging.Formatter):
    """One JSON document per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = _request_id(record)
        if request_id:
            entry["request_id"] = request_id
        context = _context(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if settings.debug:
            entry["where"] = f"{record.pathname}:{record.lineno} in {record.funcName}"
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored single-line output for local development."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[35m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        parts = [f"{self.DIM}{when}{self.RESET}", f"{color}{record.levelname:<8}{self.RESET}"]

        request_id = _request_id(record)
        if request_id:
            parts.append(f"{self.DIM}{request_id[:8]}{self.RESET}")
        parts.append(f"{record.name}: {record.getMessage()}")

        context = _context(record)
        if context:
            parts.append(" ".join(f"{key}={value}" for key, value in context.items()))

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """Logger whose unknown keyword arguments become the record's ``context``."""

    def _log(
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: dict[str, Any] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **context: Any,
    ) -> None:
        extra = {**(extra or {}), "context": context or None}
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


logging.setLoggerClass(StructuredLogger)


def setup_logging() -> None:
    """
    Install the stdout handler on the root logger.
    Call once at startup.
    """
    from shared.infrastructure.correlation import CorrelationIdFilter

    level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(JsonFormatter() if settings.is_production else ConsoleFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for noisy in ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    return logging.getLogger(name)  # type: ignore[return-value]


def mask_email(email: str | None) -> str:
    """``cashier@shababeek.com`` -> ``ca***@shababeek.com``."""
    if not email:
        return "<no-email>"
    local, at, domain = email.partition("@")
    if not at or not local:
        return "***@invalid"
    return f"{local[:2]}***@{domain}"


api_logger = get_logger("pos_api")
error_logger = get_logger("pos_api.errors")

# Authentication and session events, kept apart so they can be routed separately
security_audit_logger = get_logger("security.audit")


def audit_auth_event(
    event_type: str,
    admin_id: str | None = None,
    email: str | None = None,
    success: bool = True,
    reason: str | None = None,
    ip_address: str | None = None,
    **context: Any,
) -> None:
    """
    Record an account event: REGISTER, LOGIN, LOGOUT, LOGOUT_ALL, DELETE_ACCOUNT.

    Failures log at warning level. Emails are masked.
    """
    security_audit_logger.log(
        logging.INFO if success else logging.WARNING,
        f"AUTH_AUDIT: {event_type}",
        event_type=event_type,
        admin_id=admin_id,
        email=mask_email(email) if email else None,
        success=success,
        reason=reason,
        ip_address=ip_address,
        **context,
    )


def audit_token_event(
    event_type: str,
    admin_id: str | None = None,
    token_hash: str | None = None,
    **context: Any,
) -> None:
    """
    Record a session token event: ISSUED, REJECTED, REVOKED, REVOKED_ALL.

    ``token_hash`` is a short fingerprint, never the token itself.
    """
    security_audit_logger.info(
        f"TOKEN_AUDIT: {event_type}",
        event_type=event_type,
        admin_id=admin_id,
        token_hash=token_hash,
        **context,
    )
