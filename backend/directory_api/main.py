"""Enterprise Directory API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DirectoryError → structured JSON responses
    - CORS and session secret configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SessionMiddleware carries both the login identity and OAuth state
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from directory_api.api.error_handlers import register_error_handlers
from directory_api.api.routes import account, enterprise, health
from directory_api.config import get_settings
from directory_api.infrastructure import database
from directory_api.infrastructure.oauth import build_oauth
from directory_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(
        f"Enterprise Directory API started (environment={settings.environment}, "
        f"direct_writes={settings.direct_writes_enabled})",
    )
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Enterprise Directory API shutting down")


app = FastAPI(
    title="Enterprise Directory API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)
app.state.oauth = build_oauth(settings)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(enterprise.router)
app.include_router(account.router)

register_error_handlers(app)
