"""
Snippetbox Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn snippetbox.main:app),
       or through the `snippetbox` console script (run()).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌────────────┐ ┌─────────┐  │
    │  │ Req ID │→│ Logging │→│ Secure Hdr │→│ Session │  │
    │  └────────┘ └─────────┘ └────────────┘ └─────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌───────────────┐ ┌────────────────┐  │
    │  │ GET /    │ │ /snippet[...] │ │ /user/*        │  │
    │  └──────────┘ └───────────────┘ └────────────────┘  │
    │  ┌──────────┐ ┌───────────────┐                     │
    │  │ /health  │ │ /static/*     │                     │
    │  └──────────┘ └───────────────┘                     │
    │                                                     │
    │  Exception Handlers (plain-text bodies):            │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFound→404 │ HTTPException→its code │ →500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    create_app():  template cache compiled, stored on app.state
    Startup:       logging configured, settings validated
    Shutdown:      database engine disposed
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator, Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from snippetbox import __version__
from snippetbox.config import settings
from snippetbox.database import dispose_engine
from snippetbox.exceptions import NotFoundError, SnippetboxError, TemplateRenderError
from snippetbox.middleware.logging import RequestLoggingMiddleware
from snippetbox.middleware.request_id import RequestIDMiddleware, request_id_var
from snippetbox.middleware.secure_headers import SecureHeadersMiddleware
from snippetbox.rendering import new_template_cache
from snippetbox.routes import health, snippets, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] snippetbox.access: GET / 200 3.1ms [a1b2c3d4] from 127.0.0.1
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Access lines come from snippetbox.access instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Snippetbox starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: the development defaults still serve pages
        logger.warning("Configuration warning: %s", str(e))

    logger.info("Templates: %d pages cached", len(app.state.template_cache))
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Snippetbox shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int, headers: Optional[Mapping[str, str]] = None
) -> PlainTextResponse:
    """
    Plain-text error page: the status text and a newline, nothing else.

    Internal details never go in the body; they are logged by the caller.
    """
    response = PlainTextResponse(
        f"{HTTPStatus(status_code).phrase}\n",
        status_code=status_code,
        headers=dict(headers) if headers else None,
    )
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes.

    Handler hierarchy:
        NotFoundError              → 404
        StarletteHTTPException     → its own status (unknown route 404,
                                     wrong method 405 + Allow header)
        TemplateRenderError        → 500, template detail logged
        SnippetboxError (base)     → 500
        Exception (fallback)       → 500
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.debug("[%s] Not found: %s", rid, exc.message)
        return error_response(404)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, headers=exc.headers)

    @app.exception_handler(TemplateRenderError)
    async def handle_template_error(request: Request, exc: TemplateRenderError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s | Context: %s", rid, exc.message, exc.context, exc_info=exc,
        )
        return error_response(500)

    @app.exception_handler(SnippetboxError)
    async def handle_app_error(request: Request, exc: SnippetboxError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unhandled application error: %s | Context: %s",
            rid, exc.message, exc.context, exc_info=exc,
        )
        return error_response(500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=exc,
        )
        return error_response(500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    Tests call this for a fresh app (and template cache) per test.
    """
    app = FastAPI(
        title="Snippetbox",
        description="Paste and share snippets of text.",
        version=__version__,
        lifespan=lifespan,
        # "/snippet/" is a different path from "/snippet" and gets a 404
        redirect_slashes=False,
    )

    # ── Template Cache ────────────────────────────────────────────────────
    app.state.template_cache = new_template_cache(settings.templates_dir)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → SecureHeaders → Session → routes
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie="session",
        max_age=settings.session_lifetime,
        same_site="lax",
        https_only=settings.session_https_only,
    )
    app.add_middleware(SecureHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(snippets.router)
    app.include_router(users.router)
    app.include_router(health.router)
    app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured address."""
    import uvicorn

    uvicorn.run(
        "snippetbox.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `snippetbox.main:app` to be importable
app = create_app()
