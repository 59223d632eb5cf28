"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from takatena.api.errors import register_exception_handlers
from takatena.api.routes import auth, health, impact, listings, search, users
from takatena.config import settings
from takatena.infrastructure.database.connection import Database
from takatena.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.log_level, settings.log_format)
    app.state.database = Database(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("takatena_starting")
    try:
        yield
    finally:
        await app.state.database.dispose()
        logger.info("takatena_stopping")


def create_app() -> FastAPI:
    app = FastAPI(
        title="TakaTena",
        description="Waste-material exchange marketplace API.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(listings.router)
    app.include_router(search.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(impact.router)

    return app


app = create_app()
