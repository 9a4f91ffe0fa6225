"""Entry point for the iot_status server."""

import logging

import uvicorn

from iot_status.dependencies import Dependencies
from iot_status.server import create_app

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the status API with uvicorn."""
    deps = Dependencies.create()
    app = create_app(deps)

    logger.info(
        "Starting iot_status server (host=%s, port=%d)",
        deps.settings.http_host,
        deps.settings.http_port,
    )
    uvicorn.run(
        app,
        host=deps.settings.http_host,
        port=deps.settings.http_port,
        log_level="warning",
    )


if __name__ == "__main__":
    run_server()
