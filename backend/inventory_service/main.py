"""
Inventory Service — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) builds a fresh InventoryStore and PhotoStorage,
       stores them on app.state, and registers middleware, exception
       handlers and routers.
Who:   The CLI (inventory_service.cli) and uvicorn (`inventory_service.main:app`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │   Req ID     │→│ Logging  │→│  CORS           │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /inventory[/{id}[/photo]]  /register  /search      │
    │  /RegisterForm.html  /SearchForm.html  /health      │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Method→405 │ →500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the cache directory, log readiness
    Shutdown: log; the inventory lives in memory and is gone with the process
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Iterable, Iterator, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_service import __version__
from inventory_service.config import Settings, get_settings
from inventory_service.exceptions import (
    FileStorageError,
    InventoryServiceError,
    NotFoundError,
    UnsupportedMethodError,
    ValidationError,
)
from inventory_service.middleware.logging import RequestLoggingMiddleware
from inventory_service.middleware.request_id import RequestIDMiddleware, request_id_var
from inventory_service.routes import forms, health, inventory, register, search
from inventory_service.services.inventory_store import InventoryStore
from inventory_service.services.photo_storage import PhotoStorage

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn writes its own access lines; ours carry the request id
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    app.state.started_at = time.time()
    logger.info("Inventory service %s starting up...", __version__)

    cache_dir = app.state.photo_storage.ensure_directory()
    logger.info("Cache directory: %s", cache_dir)
    if settings.purge_photos_on_delete:
        logger.info("Photos of deleted items will be removed from the cache directory")

    logger.info("Server running at http://%s:%d/", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info(
        "Inventory service shutting down (%d in-memory items discarded)",
        len(app.state.store),
    )


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(exc: InventoryServiceError) -> dict:
    return {"error": exc.message}


def _iter_endpoints(routes: Iterable) -> Iterator:
    """Yield leaf routes, descending into included routers and mounts."""
    for route in routes:
        nested = getattr(route, "routes", None)
        if nested is None:
            nested = getattr(getattr(route, "router", None), "routes", None)
        if nested:
            yield from _iter_endpoints(nested)
        else:
            yield route


def _allowed_methods(request: Request, exc: StarletteHTTPException) -> str:
    """
    Collect every method served on this request's path.

    The router's own Allow header only names the first route that matched
    the path, so it is merged with a walk over all endpoints.
    """
    path = request.scope.get("path", request.url.path)
    methods = set()
    for route in _iter_endpoints(request.app.router.routes):
        regex = getattr(route, "path_regex", None)
        route_methods = getattr(route, "methods", None)
        if regex is not None and route_methods and regex.match(path):
            methods.update(route_methods)

    router_allow = (exc.headers or {}).get("Allow", "")
    methods.update(m.strip() for m in router_allow.split(",") if m.strip())
    return ", ".join(sorted(methods))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        ValidationError          → 400 {"error": message}
        RequestValidationError   → 400 {"error": message} (never FastAPI's 422)
        NotFoundError            → 404 {"error": message}
        UnsupportedMethodError   → 405, empty body
        FileStorageError         → 500 {"error": message}
        InventoryServiceError    → its status_code {"error": message}
        Exception (fallback)     → 500 {"error": "internal server error"}

    Context dicts are logged server-side, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=400, content=_error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # FastAPI rejects a text part in the `photo` file field before the route runs
        fields = [str((error.get("loc") or ("",))[-1]) for error in exc.errors()]
        if "photo" in fields:
            error = ValidationError(message="photo file is required", field="photo")
        else:
            error = ValidationError(message="invalid request", context={"fields": fields})
        return await handle_validation_error(request, error)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=404, content=_error_body(exc))

    @app.exception_handler(UnsupportedMethodError)
    async def handle_unsupported_method(request: Request, exc: UnsupportedMethodError):
        rid = request_id_var.get("")
        logger.info("[%s] %s", rid, exc.message)
        headers = {"Allow": exc.allowed} if exc.allowed else None
        return Response(status_code=405, headers=headers)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        rid = request_id_var.get("")
        logger.error("[%s] File storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=_error_body(exc))

    @app.exception_handler(InventoryServiceError)
    async def handle_service_error(request: Request, exc: InventoryServiceError):
        rid = request_id_var.get("")
        logger.error("[%s] Service error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # The router raises 405 when a path matches but the verb does not
        if exc.status_code == 405:
            error = UnsupportedMethodError(
                method=request.method,
                path=request.url.path,
                allowed=_allowed_methods(request, exc),
            )
            return await handle_unsupported_method(request, error)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "internal server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every call gets its own store and photo storage, so tests (and multiple
    apps in one process) never share inventory state.

    Args:
        settings: Explicit configuration; defaults to the environment-derived
                  settings from get_settings().
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Inventory Service API",
        description=(
            "Register inventory items with an optional photo, list and look them up, "
            "update their metadata, replace photos, and delete entries."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.started_at = time.time()
    app.state.store = InventoryStore()
    app.state.photo_storage = PhotoStorage(settings.cache_dir)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(inventory.router)
    app.include_router(register.router)
    app.include_router(search.router)
    app.include_router(forms.router)
    app.include_router(health.router)

    return app


# uvicorn inventory_service.main:app
app = create_app()
