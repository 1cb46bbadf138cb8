"""
Application wiring: lifespan, middleware stack, error responder.
"""

from .errors import error_response, register_exception_handlers
from .lifespan import lifespan
from .middlewares import register_middlewares

__all__ = [
    "error_response",
    "register_exception_handlers",
    "lifespan",
    "register_middlewares",
]
