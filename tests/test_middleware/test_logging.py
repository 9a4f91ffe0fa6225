"""Tests for request logging middleware."""

import logging
from unittest.mock import MagicMock

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from iot_status.middleware.logging import RequestLoggingMiddleware


async def ok_endpoint(request: Request) -> PlainTextResponse:
    return PlainTextResponse("fine", status_code=201)


async def broken_endpoint(request: Request) -> PlainTextResponse:
    raise RuntimeError("boom")


def build_client(logger: MagicMock, slow_threshold_ms: float = 5000.0) -> TestClient:
    """Wrap test routes with RequestLoggingMiddleware."""
    app = Starlette(
        routes=[
            Route("/ok", ok_endpoint),
            Route("/health", ok_endpoint),
            Route("/broken", broken_endpoint),
        ],
        middleware=[
            Middleware(
                RequestLoggingMiddleware,
                logger=logger,
                slow_threshold_ms=slow_threshold_ms,
            )
        ],
    )
    return TestClient(app, raise_server_exceptions=False)


def test_logging_middleware_logs_request_and_response() -> None:
    """Requests are logged on the way in and out."""
    mock_logger = MagicMock()
    client = build_client(mock_logger)

    client.get("/ok")

    mock_logger.info.assert_called_once_with(">>> %s %s from %s", "GET", "/ok", "testclient")
    level, fmt, method, path, status, duration = mock_logger.log.call_args[0]
    assert level == logging.INFO
    assert fmt == "<<< %s %s -> %d [%s]"
    assert (method, path, status) == ("GET", "/ok", 201)
    assert duration.endswith("ms")


def test_logging_middleware_flags_slow_requests() -> None:
    """Requests over the threshold are logged at WARNING."""
    mock_logger = MagicMock()
    client = build_client(mock_logger, slow_threshold_ms=0)

    client.get("/ok")

    level = mock_logger.log.call_args[0][0]
    duration = mock_logger.log.call_args[0][-1]
    assert level == logging.WARNING
    assert duration.endswith("SLOW!")


def test_logging_middleware_prefers_forwarded_for() -> None:
    """The first X-Forwarded-For address is logged as the client."""
    mock_logger = MagicMock()
    client = build_client(mock_logger)

    client.get("/ok", headers={"X-Forwarded-For": "192.0.2.9, 10.0.0.1"})

    assert mock_logger.info.call_args[0][-1] == "192.0.2.9"


def test_logging_middleware_skips_health() -> None:
    """Health checks are not logged."""
    mock_logger = MagicMock()
    client = build_client(mock_logger)

    client.get("/health")

    mock_logger.info.assert_not_called()
    mock_logger.log.assert_not_called()


def test_logging_middleware_logs_failures() -> None:
    """Failed requests are logged and the error propagates."""
    mock_logger = MagicMock()
    client = build_client(mock_logger)

    response = client.get("/broken")

    assert response.status_code == 500
    mock_logger.error.assert_called_once()
    assert "RuntimeError" in mock_logger.error.call_args[0]
