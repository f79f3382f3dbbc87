"""Mapping of domain errors onto HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers

from shopfront.errors import ShopfrontError, UnexpectedError

logger = structlog.get_logger(__name__)

GENERIC_MESSAGE = "Something went wrong. Please try again later."


async def shopfront_error_handler(request: Request, exc: ShopfrontError) -> JSONResponse:
    if isinstance(exc, UnexpectedError):
        logger.error("Request failed", path=request.url.path, error=exc.code, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.code, "message": GENERIC_MESSAGE})
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.code, message=exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    logger.info("Request rejected", path=request.url.path, error=exc.code, status=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "validation_error", "message": "Invalid request", "fields": jsonable_encoder(exc.errors())},
    )


async def concurrent_update_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("Concurrent update not resolved by retries", path=request.url.path)
    return JSONResponse(
        status_code=409,
        content={"error": "concurrent_update", "message": "The record changed while saving. Please retry."},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=UnexpectedError.status_code,
        content={"error": UnexpectedError.code, "message": GENERIC_MESSAGE},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Protean's own handlers plus the shopfront taxonomy and a catch-all."""
    register_exception_handlers(app)
    app.add_exception_handler(ShopfrontError, shopfront_error_handler)
    app.add_exception_handler(ExpectedVersionError, concurrent_update_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
