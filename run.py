"""Entry point for the Calculator API.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration such as MONGODB_URI, PORT and LOG_LEVEL is read from
environment variables; see ``calculator_api/app/core/config.py`` for
the full list.

Usage:
    python run.py

If MongoDB cannot be reached during startup the application refuses
to start and the process exits with status 1.
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from calculator_api.app.core.config import settings
from calculator_api.app.main import app


async def serve() -> bool:
    """Run the server until shutdown.

    Returns ``False`` if the application failed to start.
    """
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        lifespan="on",
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()
    return server.started


def main() -> int:
    started = asyncio.run(serve())
    if not started:
        logging.getLogger(__name__).error("Server failed to start")
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass
