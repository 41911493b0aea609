"""
FastAPI application entry point for the Calabozos backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from calabozos.config import get_settings
from calabozos.routes import error_response, router
from calabozos.schemas import HealthResponse

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Calabozos Backend (FastAPI)", version="0.1.0")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        response = error_response(str(exc.detail), exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return error_response("Internal server error")

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", env=settings.app_env)

    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
