# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Instantiate the FastAPI app.
* Create missing tables and run the roles / admin bootstrap on startup.
* Mount the three feature routers (auth, recipes, admin).
* Translate AppError (and anything unexpected) into structured JSON.
* Expose a /health endpoint for container liveness checks.

Production note
---------------
SECRET_KEY ships with an insecure development default.  A warning is logged
on every startup until it is overridden.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from auth.bootstrap import seed_roles_and_admin
from auth.router import router as auth_router
from admin.router import router as admin_router
from recipes.router import router as recipes_router
from core.config import INSECURE_DEFAULT_SECRET_KEY, settings
from core.errors import AppError, Unauthenticated, ValidationError
from core.logger import logger
from database import SessionLocal, init_db


# ---------------------------------------------------------------------------
# Startup / shutdown
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Recipe service starting up")
    if settings.secret_key == INSECURE_DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is the insecure development default – set it in etc/app.conf")

    init_db()
    db = SessionLocal()
    try:
        seed_roles_and_admin(db)
    finally:
        db.close()

    yield
    logger.info("Recipe service shutting down")


app = FastAPI(title="Recipe App", version="1.0.0", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Request bodies (passwords) and Authorization headers are NOT echoed.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


@app.exception_handler(AppError)
async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        # loc looks like ("body", "email") – drop the leading section name
        field = ".".join(str(part) for part in err.get("loc", ())[1:]) or "body"
        errors.append(f"{field}: {err.get('msg', 'invalid value')}")
    return await _app_error_handler(request, ValidationError(errors=errors))


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Storage failures end up here too – fatal for the request, never retried
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "An unexpected error occurred."},
    )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(recipes_router)
app.include_router(admin_router)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.get("/health")
def health():
    return {"status": "ok"}
