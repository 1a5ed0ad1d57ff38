"""
Podcast Backend: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the service graph by hand,
       compiles the GraphQL schema, and mounts routes and middleware.
Who:   Called by uvicorn (uvicorn podcast_backend.main:app) and by the tests.
When:  Once at server startup; the returned app handles all subsequent requests.

Object graph (constructor injection, no container):

    Store(session_factory)
      ├── CredentialStore(store, bcrypt_rounds)
      │     └── AccessGuard(tokens, credentials, header)
      ├── CatalogService(store)
      └── AccountService(credentials, tokens)
    TokenService(secret_key, max_age)

Lifecycle:
    Startup:  logging → config validation → optional create_all
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from ariadne.asgi import GraphQL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from podcast_backend import __version__
from podcast_backend.config import Settings, settings as default_settings
from podcast_backend.database import async_session_factory, create_all, dispose_engine, engine
from podcast_backend.graphql_api import build_schema
from podcast_backend.middleware.logging import RequestLoggingMiddleware
from podcast_backend.middleware.request_id import RequestIDMiddleware, request_id_var
from podcast_backend.repositories import Store
from podcast_backend.routes import graphql, health
from podcast_backend.services.access_guard import AccessGuard
from podcast_backend.services.account_service import AccountService
from podcast_backend.services.catalog_service import CatalogService
from podcast_backend.services.credential_store import CredentialStore
from podcast_backend.services.token_service import TokenService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def build_lifespan(config: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(config.log_level)
        logger.info("=" * 60)
        logger.info("Podcast Backend starting up...")

        try:
            config.validate_required_for_production()
        except ValueError as e:
            # Reported, not enforced
            logger.error("Configuration error (continuing anyway): %s", str(e))

        if config.db_create_all:
            await create_all(engine)
            logger.info("Database tables ensured (DB_CREATE_ALL)")

        logger.info("GraphQL endpoint: http://%s:%d/graphql", config.backend_host, config.backend_port)
        logger.info("=" * 60)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Podcast Backend shutting down...")
        await dispose_engine()
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Catch-all for REST routes.

    GraphQL failures never get here: Ariadne reports them in the response's
    `errors` list. Stack traces are logged server-side only.
    """

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use (defaults to the process-wide singleton)
        session_factory: Session factory for the store (tests pass one bound
            to a throwaway SQLite database)
    """
    config = config or default_settings

    app = FastAPI(
        title="Podcast Backend API",
        description="GraphQL API for podcast hosting: accounts, podcasts and episodes.",
        version=__version__,
        lifespan=build_lifespan(config),
    )

    # ── Services ──────────────────────────────────────────────────────────
    store = Store(session_factory or async_session_factory)
    tokens = TokenService(config.secret_key, max_age=config.token_max_age)
    credentials = CredentialStore(store, bcrypt_rounds=config.bcrypt_rounds)
    guard = AccessGuard(tokens, credentials, header_name=config.token_header)
    accounts = AccountService(credentials, tokens)
    catalog = CatalogService(store)

    schema = build_schema(accounts, catalog)

    app.state.store = store
    app.state.access_guard = guard
    app.state.graphql_schema = schema
    app.state.graphql_debug = config.graphql_debug
    # GET /graphql only (explorer); POST executes in routes/graphql.py
    app.state.graphql_app = GraphQL(
        schema,
        context_value=guard.context_for_request,
        debug=config.graphql_debug,
    )

    # ── Middleware ────────────────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(graphql.router)
    app.include_router(health.router)

    return app


app = create_app()
