"""
POS API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import api_logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter

from .core import lifespan, register_exception_handlers, register_middlewares
from .routers import api_router

app = FastAPI(
    title="Shababeek POS API",
    description="Point-of-sale backend: staff, menu, tables and orders",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting (RateLimitExceeded is answered by the error responder)
app.state.limiter = limiter

register_exception_handlers(app)
register_middlewares(app)

app.include_router(api_router)


# =============================================================================
# Health Check
# =============================================================================


@app.get("/api/health", tags=["health"])
def health_check(db: Session = Depends(get_db)):
    """Liveness plus a database round trip."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        api_logger.exception("Health check: database unreachable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "service": "pos-api", "database": "unreachable"},
        )
    return {"status": "healthy", "service": "pos-api", "database": "healthy"}


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pos_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.debug,
    )
