"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from customer_admin.api import router as api_router
from customer_admin.core.config import Settings, get_settings
from customer_admin.core.database import (
    check_db_connected,
    create_db_engine,
    create_session_factory,
)
from customer_admin.core.errors import register_exception_handlers
from customer_admin.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Probe the database once at startup; dispose the pool at shutdown if we own it."""
    db = app.state.session_factory()
    try:
        if check_db_connected(db):
            logger.info("Database connection established")
        else:
            logger.error("Database connection failed; requests will return 500 until it recovers")
    finally:
        db.close()
    yield
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        engine.dispose()


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """
    Build the application.

    session_factory lets callers (tests, scripts) hand in their own pool;
    otherwise one is created from DATABASE_URL and owned by the app.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Customer Admin API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    if session_factory is None:
        engine = create_db_engine(settings)
        app.state.engine = engine
        session_factory = create_session_factory(engine)
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
