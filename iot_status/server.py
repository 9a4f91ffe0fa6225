"""iot_status ASGI application.

Thin wiring of routes, middleware and logging. Request handling lives in
handlers/, probing in services/.
"""

import json
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from iot_status.config import Settings
from iot_status.dependencies import Dependencies
from iot_status.handlers import (
    InvalidRequestError,
    handle_catalog_action,
    handle_catalog_debug,
    handle_get_catalog,
    handle_list_devices,
    handle_status_action,
)
from iot_status.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from iot_status.utils.console import RequestFormatter

logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def configure_logging(settings: Settings) -> None:
    """Configure colorful logging for the iot_status package.

    Safe to call more than once; the handler is only added the first time.
    """
    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("iot_status")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(RequestFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    # Suppress noisy third-party loggers
    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "starlette",
        "anyio",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


def _deps(request: Request) -> Dependencies:
    deps: Dependencies = request.app.state.deps
    return deps


async def read_payload(request: Request) -> dict[str, Any]:
    """Decode a request body as JSON, or as form data when posted as a form.

    Malformed or non-object bodies decode to an empty dict.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items()}

    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug("Ignoring malformed JSON body: %s", e)
        return {}
    return data if isinstance(data, dict) else {}


def _log_payload(request: Request, payload: dict[str, Any]) -> None:
    if _deps(request).settings.log_payloads:
        text = json.dumps(payload, default=str)
        if len(text) > 1000:
            text = text[:1000] + "... [truncated]"
        logger.debug("    Payload: %s", text)


async def status_endpoint(request: Request) -> Response:
    """GET lists devices; POST runs check_single / check_batch / check_all."""
    deps = _deps(request)
    if request.method == "GET":
        return JSONResponse(await run_in_threadpool(handle_list_devices, deps))

    payload = await read_payload(request)
    _log_payload(request, payload)
    return JSONResponse(await handle_status_action(payload, deps))


async def devices_endpoint(request: Request) -> Response:
    """GET returns the catalog; POST adds or removes categories and devices."""
    deps = _deps(request)
    if request.method == "GET":
        return JSONResponse(await run_in_threadpool(handle_get_catalog, deps))

    payload = await read_payload(request)
    _log_payload(request, payload)
    body, status_code = await run_in_threadpool(handle_catalog_action, payload, deps)
    return JSONResponse(body, status_code=status_code)


async def devices_debug_endpoint(request: Request) -> Response:
    """Describe the catalog file and the errors seen since startup."""
    body = await run_in_threadpool(handle_catalog_debug, _deps(request))
    body["errors"] = dict(request.app.state.error_counts)
    return JSONResponse(body)


async def health_check(request: Request) -> PlainTextResponse:
    """Health check endpoint."""
    client_host = request.client.host if request.client else "unknown"
    logger.debug("Health check from %s", client_host)
    return PlainTextResponse("OK")


async def invalid_request_handler(request: Request, exc: Exception) -> Response:
    """Render InvalidRequestError as ``{success: false, error}``."""
    assert isinstance(exc, InvalidRequestError)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        {"success": False, "error": exc.message},
        status_code=exc.status_code,
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Render routing errors (404, 405) as JSON."""
    assert isinstance(exc, HTTPException)
    error = "Method not allowed" if exc.status_code == 405 else exc.detail
    return JSONResponse(
        {"success": False, "error": error},
        status_code=exc.status_code,
        headers=exc.headers,
    )


@asynccontextmanager
async def app_lifespan(app: Starlette) -> AsyncIterator[None]:
    """Log startup and shutdown."""
    deps: Dependencies = app.state.deps
    store = deps.open_store()
    logger.info(
        "iot_status server starting: catalog=%s (%d devices, writable=%s)",
        store.config_path,
        len(store.entries()),
        store.can_write(),
    )
    logger.info(
        "Probe deadlines: connect=%.1fs total=%.1fs ping=%.1fs, max_concurrency=%d",
        deps.settings.connect_timeout,
        deps.settings.total_timeout,
        deps.settings.ping_timeout,
        deps.settings.max_concurrency,
    )
    try:
        yield
    finally:
        logger.info("iot_status server shutting down")


def create_app(deps: Dependencies | None = None) -> Starlette:
    """Create and configure the ASGI application.

    Args:
        deps: Dependencies to use; built from the environment when omitted.

    Returns:
        Configured Starlette application
    """
    deps = deps or Dependencies.create()
    settings = deps.settings
    configure_logging(settings)
    error_counts: dict[str, int] = {}

    routes = [
        Route("/health", health_check, methods=["GET"]),
        Route("/api/status", status_endpoint, methods=["GET", "POST"]),
        Route("/status", status_endpoint, methods=["GET", "POST"]),
        Route("/api/devices", devices_endpoint, methods=["GET", "POST"]),
        Route("/api/devices/debug", devices_debug_endpoint, methods=["GET"]),
    ]

    # First listed = outermost
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type"],
        ),
        Middleware(
            ErrorHandlingMiddleware,
            include_traceback=settings.include_traceback,
            error_counts=error_counts,
        ),
        Middleware(RequestLoggingMiddleware, slow_threshold_ms=settings.slow_threshold_ms),
    ]

    app = Starlette(
        routes=routes,
        middleware=middleware,
        exception_handlers={
            InvalidRequestError: invalid_request_handler,
            HTTPException: http_exception_handler,
        },
        lifespan=app_lifespan,
    )
    app.state.deps = deps
    app.state.error_counts = error_counts
    return app
