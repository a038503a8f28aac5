"""
Exception handlers translating repository errors into HTTP responses.

Route handlers never answer with a 5xx: unclassified store failures are
reported as 400.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from utils.errors import (
    InvalidCredentials,
    NotFound,
    TodoServiceError,
    Unauthenticated,
)

logger = logging.getLogger(__name__)

# Answered with the status code alone.
_EMPTY_BODY_ERRORS = (Unauthenticated, NotFound, InvalidCredentials)


async def service_error_handler(request: Request, exc: TodoServiceError) -> Response:
    logger.info(
        "%s %s -> %d %s: %s",
        request.method, request.url.path, exc.status_code,
        exc.__class__.__name__, exc.message,
    )
    if isinstance(exc, _EMPTY_BODY_ERRORS):
        return Response(status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "ValidationError",
            "message": "Request body is malformed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def store_error_handler(request: Request, exc: PyMongoError) -> Response:
    logger.warning("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "StoreError", "message": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TodoServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, store_error_handler)
