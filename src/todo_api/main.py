"""
Process entry point for the Todo Master API.

Usage:
    todo-api
    uvicorn todo_api.main:app --port 5000
"""
from __future__ import annotations

import logging

import uvicorn

from .app import create_app
from .logs import configure_logging
from .settings import get_settings

logger = logging.getLogger(__name__)

_settings = get_settings()
configure_logging(_settings.log_level)

app = create_app(_settings)


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the application on the configured host and port."""
    logger.info("Server is running on port %s", _settings.port)
    uvicorn.run(app, host=_settings.host, port=_settings.port, log_level=_settings.log_level.lower())


if __name__ == "__main__":
    run()
