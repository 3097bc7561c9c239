"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from cyberquest.catalog.router import router as catalog_router
from cyberquest.catalog.seed import seed_catalog
from cyberquest.community.router import router as community_router
from cyberquest.config import get_settings
from cyberquest.database import close_db, get_session, init_db
from cyberquest.errors import AppError
from cyberquest.health.router import router as health_router
from cyberquest.leaderboard.router import router as leaderboard_router
from cyberquest.middleware import setup_middleware
from cyberquest.redis_client import close_redis, init_redis
from cyberquest.scoring.router import router as scoring_router
from cyberquest.stats.router import router as stats_router
from cyberquest.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    if settings.redis_url:
        await init_redis(settings.redis_url)

    # Seed stock catalog content (idempotent)
    if settings.seed_on_startup:
        try:
            async for db in get_session():
                await seed_catalog(db)
                break
        except (AppError, SQLAlchemyError):
            logger.warning("catalog_seed_failed", hint="tables may not exist yet", exc_info=True)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="CyberQuest API",
        description="Backend API for CyberQuest, a gamified cybersecurity-education platform",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(users_router)
    app.include_router(stats_router)
    app.include_router(leaderboard_router)
    app.include_router(scoring_router)
    app.include_router(catalog_router)
    app.include_router(community_router)

    return app


app = create_app()
