"""
PawMart Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the Database, DocumentStore and
       services for one application and returns a configured FastAPI app.
Who:   Called by uvicorn (uvicorn pawmart.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────┐ ┌───────────┐ ┌─────────┐ ┌─────────┐  │
    │  │ /users  │ │ /listings │ │ /orders │ │ /health │  │
    │  └─────────┘ └───────────┘ └─────────┘ └─────────┘  │
    │                                                     │
    │  app.state: database → store → services             │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the documents table when DB_CREATE_SCHEMA is set
    3. Log startup complete

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pawmart import __version__
from pawmart.config import Settings, settings
from pawmart.database import Database
from pawmart.exceptions import DatabaseError, PawMartError
from pawmart.middleware.logging import RequestLoggingMiddleware
from pawmart.middleware.request_id import RequestIDMiddleware, request_id_var
from pawmart.routes import health, listings, orders, users
from pawmart.services import ServiceRegistry
from pawmart.store import DocumentStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (Docker captures it)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every request / statement at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("PawMart Backend %s starting up...", __version__)

    if app_settings.db_create_schema:
        await database.create_schema()

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)
    logger.info("=" * 60)

    yield

    logger.info("PawMart Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        DatabaseError         → 500, fixed per-operation message
        PawMartError (base)   → 500, generic message
        Anything else         → 500 from RequestIDMiddleware

    Details (driver errors, stack traces) are logged server-side only.
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(PawMartError)
    async def handle_app_error(request: Request, exc: PawMartError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each call builds its own Database (engine + pool), DocumentStore and
    services and keeps them on `app.state`; nothing is shared between two
    apps, so tests can run isolated instances side by side.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="PawMart API",
        description="Users, pet listings and orders for the PawMart marketplace.",
        version=__version__,
        lifespan=lifespan,
    )

    database = Database(app_settings)
    store = DocumentStore(database)
    app.state.settings = app_settings
    app.state.database = database
    app.state.store = store
    app.state.services = ServiceRegistry.from_store(store)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(listings.router)
    app.include_router(orders.router)

    return app


# uvicorn expects `pawmart.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the app on HOST:PORT with uvicorn."""
    import uvicorn

    uvicorn.run("pawmart.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
