"""
Info API — FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (uvicorn info_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │    {api_prefix}/themas[/{id}]   GET /management/health │
    │                                                     │
    │  Exception Handlers:                                │
    │    BadRequestAlert→400  Validation→400  NotFound→404│
    │    UnsupportedMediaType→415  SQLAlchemy/other→500   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from info_api import __version__
from info_api.config import settings
from info_api.database import dispose_engine
from info_api.exceptions import (
    BadRequestAlertError,
    NotFoundError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from info_api.middleware.logging import RequestLoggingMiddleware
from info_api.middleware.request_id import RequestIDFilter, RequestIDMiddleware, request_id_var
from info_api.routes import health, themas
from info_api.utils.header_util import create_failure_alert

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] info_api.routes.themas [1f0c2a9b]: message

    The request ID comes from RequestIDFilter, attached to the handler so
    third-party records get it too.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: configure logging. Shutdown: close pooled database connections."""
    setup_logging()
    logger.info("Info API %s starting up", __version__)
    logger.info("Serving %s/themas on http://%s:%d", settings.api_prefix, settings.backend_host, settings.backend_port)

    yield

    logger.info("Info API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        BadRequestAlertError       → 400 + X-{app}-error / X-{app}-params
        ValidationError            → 400
        NotFoundError              → 404, empty body
        UnsupportedMediaTypeError  → 415
        SQLAlchemyError            → 500, details logged only
        Exception (fallback)       → 500
    """

    @app.exception_handler(BadRequestAlertError)
    async def handle_bad_request_alert(request: Request, exc: BadRequestAlertError):
        rid = request_id_var.get("")
        logger.warning("Bad request on %s: %s (%s)", exc.entity_name, exc.message, exc.error_key)
        return JSONResponse(
            status_code=400,
            content={
                "error": "bad_request",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
            headers=create_failure_alert(settings.application_name, exc.entity_name, exc.error_key),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("Validation error: %s", exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.debug("Not found: %s", exc.message)
        return Response(status_code=404)

    @app.exception_handler(UnsupportedMediaTypeError)
    async def handle_unsupported_media_type(request: Request, exc: UnsupportedMediaTypeError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=415,
            content={
                "error": "unsupported_media_type",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
            headers={"Accept-Patch": exc.supported},
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        rid = request_id_var.get("")
        logger.error("Database error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
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

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Info API",
        description="CRUD REST API for Thema entities with paging and merge-patch updates.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # Request ID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Location",
            "Link",
            "X-Total-Count",
            "X-Request-ID",
            f"X-{settings.application_name}-alert",
            f"X-{settings.application_name}-error",
            f"X-{settings.application_name}-params",
        ],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(themas.router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


app = create_app()
