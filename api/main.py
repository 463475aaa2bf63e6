"""
api/main.py -- FastAPI application entry point for Chirpy.

Exposes registration, login and chirps over HTTP. The web pages (/app and
/admin/metrics) live in web/routes.py and are mounted by asgi.py.

Run with:      python main.py
               uvicorn asgi:app --reload

Lifespan opens the user and chirp stores and creates the hit counter on
startup, and closes the stores on shutdown. Everything a handler needs is
on app.state; there is no module-level mutable state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorDetail, ErrorResponse
from api.routes.admin import router as admin_router
from api.routes.chirps import router as chirps_router
from api.routes.users import router as users_router
from auth.store import UserStore
from chirps.store import ChirpStore
from core.config import get_settings
from core.metrics import HitCounter

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("chirpy.api")

VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Lifespan -- modern startup / shutdown pattern (replaces @app.on_event)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application-level resources across the full server lifetime.

    Settings are resolved first so a missing or short SECRET_KEY stops the
    server before it accepts a request.
    """
    settings = get_settings()
    logger.info("Chirpy API starting up (debug=%s)", settings.debug)
    app.state.user_store = UserStore(settings.db_url)
    app.state.chirp_store = ChirpStore(settings.db_url)
    app.state.hits = HitCounter()
    logger.info("Stores initialized (%d users)", app.state.user_store.count_users())

    yield

    app.state.chirp_store.close()
    app.state.user_store.close()
    logger.info("Chirpy API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Chirpy API",
    description="Short posts with email/password accounts and bearer-token auth.",
    version=VERSION,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Hit counter middleware
#
# Every request under /app counts as a visit. /admin/metrics reports the
# count and POST /admin/reset zeroes it.
# ---------------------------------------------------------------------------


@app.middleware("http")
async def count_app_hits(request: Request, call_next):
    path = request.url.path
    if path == "/app" or path.startswith("/app/"):
        request.app.state.hits.increment()
    return await call_next(request)


# ---------------------------------------------------------------------------
# Request logging middleware
#
# Logs method, path, status and latency. Headers are never logged: the
# Authorization header carries a bearer token.
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(users_router, prefix="/api", tags=["Users"])
app.include_router(chirps_router, prefix="/api", tags=["Chirps"])
app.include_router(admin_router, prefix="/admin", tags=["Admin"])
# Web UI router is mounted by asgi.py, not here.


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope so API clients can parse
# errors uniformly without inspecting status codes to choose a schema.
# ---------------------------------------------------------------------------


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 with structured error when request body or path params fail validation.

    Only field locations and messages are echoed back. Pydantic also records
    the offending input, which for these routes can be a password.
    """
    problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors())
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error=ErrorDetail(
                code="validation_error",
                message="Request validation failed.",
                detail=problems,
            )
        ).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return a structured error for all FastAPI/Starlette HTTP exceptions.

    Route handlers raise HTTPException with detail={"code": ..., "message": ...}.
    When detail is already a dict, use it directly as the error field rather
    than stringifying it.
    """
    if isinstance(exc.detail, dict):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=ErrorDetail(
                code=f"http_{exc.status_code}",
                message=str(exc.detail),
            )
        ).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception is written to the server log only, never to the
    response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error=ErrorDetail(
                code="internal_error",
                message="An unexpected error occurred.",
            )
        ).model_dump(),
    )


# ---------------------------------------------------------------------------
# Health endpoint
#
# Defined directly in main.py (not in a router) so it is always reachable
# regardless of router registration state.
# ---------------------------------------------------------------------------


@app.get("/api/healthz", response_class=PlainTextResponse, tags=["Health"])
async def healthz() -> str:
    """Return plain-text OK for load balancers and readiness probes."""
    return "OK"
