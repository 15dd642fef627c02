from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .db import SQLiteStore, StoreError
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


async def store_error_handler(request: Request, exc: StoreError) -> PlainTextResponse:
    """
    Translate any store failure into the fixed generic error response.

    The cause is logged and never returned to the caller.
    """
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return PlainTextResponse("Server Error", status_code=500)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    A body that is not valid JSON is a bad request (400); any other validation
    failure, such as a non-integer id, is reported as 422.

    Response format:
        {
            "error": "BadRequest" | "ValidationError",
            "message": "...",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    errors = jsonable_encoder(exc.errors())
    if any(err.get("type") == "json_invalid" for err in errors):
        return JSONResponse(
            status_code=400,
            content={
                "error": "BadRequest",
                "message": "Malformed request body",
                "detail": errors,
            },
        )
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": errors,
        },
    )


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[SQLiteStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment when omitted.
        store: Data access layer to serve from. When omitted, a SQLiteStore is
            opened at settings.db_path and its schema is created if missing.

    Returns:
        The configured FastAPI app, with the store available as app.state.store.
    """
    settings = settings or get_settings()
    if store is None:
        store = SQLiteStore(settings.db_path)
        store.init_schema()

    app = FastAPI(
        title="Todo Master API",
        description="Backend API service for managing todos backed by a relational store.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.store = store

    # '*' (or an empty list) allows every origin
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreError, store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the database in use.
        """
        return {"message": "Healthy", "database": store.db_path}

    app.include_router(todos_router.router)
    return app
