#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
MinWiki — FastAPI application factory
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from minwiki.core.config import get_settings
from minwiki.core.database import create_all_tables, engine_scope
from minwiki.core.errors import RouteMismatch, StoreError
from minwiki.routes import pages, search
from minwiki.schemas import HealthResponse
from minwiki.services.pages import PageStore, get_store
from minwiki.services.renderer import render_error
from minwiki.ui import views

log = logging.getLogger(__name__)

# Shown to clients in place of driver or template error text
NOT_FOUND_MESSAGE    = "The page you requested could not be found."
STORE_FAILED_MESSAGE = "The page store could not complete the request."
SERVER_ERROR_MESSAGE = "Something went wrong rendering this page."


# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database engine for the lifetime of the app.

    A store passed to ``create_app`` is used as-is and left to its owner.
    """
    if getattr(app.state, "store", None) is not None:
        yield
        return

    settings = get_settings()
    async with engine_scope(settings.resolved_database_url) as engine:
        if settings.create_tables:
            await create_all_tables(engine)
        app.state.store = PageStore(engine)
        try:
            yield
        finally:
            app.state.store = None


# -----------------------------------------------------------------------------

def _is_api(request: Request) -> bool:
    return request.url.path.startswith("/api/")


# -----------------------------------------------------------------------------

def create_app(store: PageStore | None = None) -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A minimal wiki: view, edit, save and search pages.",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store

    # ── API routers ───────────────────────────────────────────────────────

    prefix = "/api/v1"

    app.include_router(pages.router,  prefix=prefix)
    app.include_router(search.router, prefix=prefix)

    # ── Health check ──────────────────────────────────────────────────────

    @app.get("/api/health", tags=["system"], response_model=HealthResponse)
    async def health(store: PageStore = Depends(get_store)):
        count = await store.count()
        return HealthResponse(
            status="ok",
            version=settings.app_version,
            app=settings.app_name,
            pages=count,
        )

    # ── UI router (catch-all, must come last) ─────────────────────────────

    app.include_router(views.router)

    # ── Exception handlers ────────────────────────────────────────────────

    @app.exception_handler(RouteMismatch)
    async def route_mismatch(request: Request, exc: RouteMismatch):
        if _is_api(request):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"detail": "Not found"},
            )
        return render_error(request, NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)

    @app.exception_handler(404)
    async def not_found(request: Request, exc: StarletteHTTPException):
        if _is_api(request):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"detail": exc.detail},
            )
        return render_error(request, NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError):
        log.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        if _is_api(request):
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": STORE_FAILED_MESSAGE},
            )
        return render_error(request, STORE_FAILED_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(500)
    async def server_error(request: Request, exc):
        if _is_api(request):
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Internal server error"},
            )
        return render_error(request, SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return app


# -----------------------------------------------------------------------------
