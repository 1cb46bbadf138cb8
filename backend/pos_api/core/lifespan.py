"""
Application lifespan: configuration check, schema, seed, engine disposal.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.config.logging import api_logger as logger, setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import engine, get_db_context

from ..models import Base
from ..services.domain import seed_admins


def check_configuration() -> None:
    """
    Raises:
        RuntimeError: Production is configured with insecure values.
    """
    problems = settings.validate_production_secrets()
    for problem in problems:
        logger.error("Configuration error", problem=problem)
    if problems:
        raise RuntimeError(f"Refusing to start with insecure configuration: {'; '.join(problems)}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    check_configuration()
    logger.info("Starting POS API", port=settings.rest_api_port, env=settings.environment)

    # Collections are plain tables without cross references, created in place
    Base.metadata.create_all(bind=engine)

    if settings.seed_on_startup:
        with get_db_context() as db:
            seed_admins(db)

    yield

    engine.dispose()
    logger.info("POS API stopped")
