"""
Pet Adoption Backend — FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn pet_adoption.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────────┐ ┌──────────────┐ ┌──────┐ ┌──────┐       │
    │  │  Req ID    │→│ Access Log   │→│ GZip │→│ CORS │       │
    │  └────────────┘ └──────────────┘ └──────┘ └──────┘       │
    │                                                          │
    │  Routes:                                                 │
    │  /  /health  /api/users  /api/pets  /api/adopt(ions)     │
    │  /api/donations  /api/my-donations                       │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ Auth→401 │ Forbidden→403 │ NotFound→404 │
    │  Store→500      │ anything else→500                      │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the document store (unless one was injected) and ping it
    3. On ping failure: log, leave the store unset, keep running. Data
       routes then answer 500 and /health answers 503.

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from pet_adoption import __version__
from pet_adoption.config import settings
from pet_adoption.database import DocumentStore
from pet_adoption.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)
from pet_adoption.middleware.logging import RequestLoggingMiddleware
from pet_adoption.middleware.request_id import RequestIDMiddleware, request_id_var
from pet_adoption.routes import adoptions, donations, health, pets, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2025-01-15T12:00:00 [INFO] pet_adoption.services.pet_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Pet adoption backend %s starting up...", __version__)

    if app.state.store is None:
        store: Optional[DocumentStore] = None
        try:
            store = DocumentStore.from_settings(settings)
            await store.ping()
        except StoreError as e:
            # Stay up in degraded mode; /health reports the outage
            logger.error("Database connection failed: %s | Context: %s", e.message, e.context)
            if store is not None:
                await store.close()
        else:
            app.state.store = store
            logger.info("Connected to MongoDB database '%s'", settings.database_name)

    logger.info("Server is running at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Pet adoption backend shutting down...")
    if app.state.store is not None:
        await app.state.store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request_id_var.get("")


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {
        "error": error,
        "message": message,
        "request_id": _request_id(request),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse body.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        AuthenticationError                      → 401
        PermissionDeniedError                    → 403
        NotFoundError                            → 404
        StoreError                               → 500 (context logged, not returned)
        Exception (fallback)                     → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return _error_response(request, 400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()))
        logger.warning("[%s] Malformed request: %s", _request_id(request), first.get("msg"))
        return _error_response(
            request,
            400,
            "validation_error",
            "Invalid request",
            {"field": field, "reason": first.get("msg")} if first else None,
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error_response(request, 401, "unauthenticated", exc.message)

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(request: Request, exc: PermissionDeniedError):
        return _error_response(request, 403, "forbidden", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(request, 404, "not_found", exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error("[%s] Store error: %s | Context: %s", _request_id(request), exc.message, exc.context)
        return _error_response(request, 500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", _request_id(request), str(exc), exc_info=True)
        return _error_response(
            request,
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: document store to serve from. When omitted, the lifespan
               hook builds one from settings at startup.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Pet Adoption API",
        description=(
            "Pets, adoption requests, donation campaigns and users for a "
            "pet adoption platform, backed by MongoDB."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(pets.router)
    app.include_router(adoptions.router)
    app.include_router(donations.router)

    return app


# uvicorn expects `pet_adoption.main:app` to be importable
app = create_app()
