"""
Journal Backend — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) builds every stateful collaborator
       (engine, session factory, credential and auth services) from one
       Settings object, hangs them on app.state, and wires middleware,
       exception handlers and routers.
Who:   uvicorn (`uvicorn journal.main:create_app --factory`), the
       `journal-server` console script, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /api/auth/*  │ │ /api/entries │ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Auth→401 │ NotFound→404     │   │
    │  │ Database→500   │ anything else→500           │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Startup precondition:
    create_app() raises ValueError when TOKEN_SECRET is missing. The server
    never comes up without a signing secret.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from journal import __version__
from journal.config import Settings
from journal.database import build_engine, build_session_factory, dispose_engine
from journal.exceptions import (
    GENERIC_SERVER_ERROR,
    AuthenticationError,
    DatabaseError,
    JournalError,
    NotFoundError,
    ValidationError,
)
from journal.middleware.logging import RequestLoggingMiddleware
from journal.middleware.request_id import RequestIDMiddleware, request_id_var
from journal.routes import auth, entries, health
from journal.services.auth_service import AuthService
from journal.services.credential_service import CredentialService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] journal.services.entry_service: Entry 3 created
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("Journal Backend %s starting up...", __version__)
    logger.info(
        "Entry ownership: %s",
        "scoped to the signed-in user" if settings.scope_entries_to_user else "unscoped (shared list)",
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Journal Backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers (Error Translator)
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # loc looks like ("body", "title") or ("body", 12) for a JSON syntax error
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every exception type to a status code and an `{"error": message}` body.

    Handler table:
        ValidationError          → 400
        RequestValidationError   → 400 (malformed JSON, wrong field types)
        AuthenticationError      → 401 + WWW-Authenticate: Bearer
        NotFoundError            → 404
        DatabaseError            → 500, generic message
        JournalError (base)      → 500, generic message
        HTTPException            → its own status (unknown route, bad method)
        Exception (fallback)     → 500, generic message (normally answered by
                                   RequestIDMiddleware; this covers failures
                                   in the middleware stack itself)

    Internal details (SQL, driver messages, stack traces) are logged with the
    request ID and never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = _describe_request_error(exc)
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), message)
        return _error(400, message)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error(401, exc.message, headers={"WWW-Authenticate": "Bearer"})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(JournalError)
    async def handle_journal_error(request: Request, exc: JournalError):
        logger.error(
            "[%s] Unhandled application error %s: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
        )
        return _error(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error(500, GENERIC_SERVER_ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration. Defaults to reading the environment.

    Raises:
        ValueError: required configuration (TOKEN_SECRET) is missing.
    """
    settings = settings or Settings()
    settings.validate_required()

    app = FastAPI(
        title="Journal API",
        description="Personal journal: sign up, sign in, and manage entries.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Collaborators ─────────────────────────────────────────────────────
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.credential_service = CredentialService(
        settings.token_secret,
        expire_minutes=settings.token_expire_minutes,
    )
    app.state.auth_service = AuthService(app.state.credential_service)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(entries.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "journal.main:create_app",
        factory=True,
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
