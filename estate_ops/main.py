"""Estate Ops API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EstateOpsError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Startup does not fail on an unreachable database: requests surface
      DependencyError (503) until it comes back
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from estate_ops.api.error_handlers import register_error_handlers
from estate_ops.api.routes import auth, companies, employee_profiles, projects, users
from estate_ops.config import get_settings
from estate_ops.infrastructure import database
from estate_ops.infrastructure.observability import setup_logging

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
    if not await database.db_manager.health_check():
        logger.warning("Database unreachable at startup")
    logger.info("Estate Ops API started")
    yield
    await database.db_manager.engine.dispose()
    logger.info("Estate Ops API shutting down")


app = FastAPI(title="Estate Ops API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(companies.router)
app.include_router(users.router)
app.include_router(employee_profiles.router)
app.include_router(projects.router)
app.include_router(auth.router)

register_error_handlers(app)
