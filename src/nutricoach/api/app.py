"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from nutricoach.api.calculations import router as calculations_router
from nutricoach.api.diary import router as diary_router
from nutricoach.api.patients import router as patients_router
from nutricoach.app_logging import configure_logging
from nutricoach.containers import AppContainer
from nutricoach.domain.errors import (
    ConversionError,
    InvalidBiometricInputError,
    MissingInputError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(calculations_router)
    app.include_router(diary_router)
    app.include_router(patients_router)

    @app.exception_handler(ConversionError)
    async def conversion_error(_request: Request, exc: ConversionError) -> JSONResponse:
        return _error_response(HTTPStatus.UNPROCESSABLE_ENTITY, exc)

    @app.exception_handler(MissingInputError)
    async def missing_input(_request: Request, exc: MissingInputError) -> JSONResponse:
        logger.info("Missing input: %s", exc)
        return _error_response(HTTPStatus.NOT_FOUND, exc)

    @app.exception_handler(InvalidBiometricInputError)
    async def invalid_biometrics(
        _request: Request, exc: InvalidBiometricInputError
    ) -> JSONResponse:
        return _error_response(HTTPStatus.UNPROCESSABLE_ENTITY, exc)

    @app.exception_handler(ValueError)
    async def invalid_value(_request: Request, exc: ValueError) -> JSONResponse:
        return _error_response(HTTPStatus.UNPROCESSABLE_ENTITY, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )
