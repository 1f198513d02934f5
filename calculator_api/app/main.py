"""
Main entrypoint for the Calculator API.

This module assembles the FastAPI application, sets up logging,
middleware and the storage connection, and includes the API router.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``.  Importing the app
here makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn calculator_api.app.main:app --reload

The storage connection is established by the lifespan handler before
the first request is served.  If MongoDB cannot be reached the
handler raises ``StorageError`` and the server aborts startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints.calculations import error_response
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import close_storage, connect_to_storage
from .core.logging_config import setup_logging
from .services.calculation_service import CalculationRepository

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "health": "GET /",
    "addCalculation": "POST /api/calculations/add",
    "getCalculations": "GET /api/calculations",
    "getCalculation": "GET /api/calculations/:id",
    "deleteCalculation": "DELETE /api/calculations/:id",
}


def create_app(database: Optional[Any] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database : Optional[Any]
        A database handle to use instead of connecting to
        ``settings.mongodb_uri``.  Tests pass an in‑memory substitute
        here; when given, the lifespan neither connects nor closes it.
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    # Initialise logging before anything else so that startup messages
    # are formatted consistently.
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        db = database
        if db is None:
            # Raises StorageError on failure, which aborts startup.
            client, db = await connect_to_storage(settings)
        app.state.repository = CalculationRepository(
            db[settings.collection_name], default_limit=settings.default_list_limit
        )
        try:
            yield
        finally:
            if client is not None:
                close_storage(client)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings

    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Something went wrong!",
                str(exc),
            )

    # Added after the error middleware so that CORS headers are also
    # applied to the 500 responses it produces.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def malformed_body_handler(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, "Malformed JSON body")

    @app.get("/")
    async def root() -> dict:
        """Describe the service and list the available routes."""
        return {"message": "API is working!", "endpoints": ENDPOINTS}

    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
