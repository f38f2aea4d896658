"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cq.config import get_settings
from cq.dependencies import init_random
from cq.gamification.router import router as gamification_router
from cq.gamification.seed import seed_catalog
from cq.health.router import router as health_router
from cq.middleware import setup_middleware
from cq.quiz.router import router as quiz_router
from cq.redis_client import close_redis, init_redis
from cq.storage import close_store, init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    store = await init_store(settings)
    init_random(settings.random_seed)

    await init_redis(settings.redis_url)

    if settings.seed_catalog_on_startup:
        try:
            await seed_catalog(store)
        except Exception:
            logger.warning("Catalog seeding failed (tables may not exist yet)", exc_info=True)

    yield

    await close_store()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Cultural Quest API",
        description="Quiz, progression and achievement engine for Cultural Quest",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(quiz_router)
    app.include_router(gamification_router)

    return app


app = create_app()
