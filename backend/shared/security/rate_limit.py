"""
Rate limiting using slowapi.
Protects the login endpoint from credential stuffing.

Usage:
    @router.post("/login")
    @limiter.limit(settings.login_rate_limit)
    def login(request: Request, ...):
        ...

Exceeded limits raise slowapi's RateLimitExceeded, which the error
classifier answers with a 429.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from shared.config.settings import settings

# Create limiter instance using client IP as key
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
