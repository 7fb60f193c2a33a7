"""reachq API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ReachqError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Resolver bundle built once on startup via lifespan, stored on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Resolvers on app.state + Depends instead of module globals: one instance
      per process, replaceable in tests
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reachq.api.error_handlers import register_error_handlers
from reachq.api.routes import health, reachability
from reachq.config import get_settings
from reachq.infrastructure.flexible_resolvers import build_default_resolvers
from reachq.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.resolvers = build_default_resolvers()
    logger.info("reachq API started")
    yield
    logger.info("reachq API shutting down")


settings = get_settings()
app = FastAPI(
    title="reachq API", version=settings.service_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(reachability.router)

register_error_handlers(app)
