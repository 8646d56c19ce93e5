"""
Exception handlers that render every failure in the response envelope.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsdesk.core.errors import NewsDeskError, ValidationFailure

logger = logging.getLogger(__name__)


def _field_errors(errors) -> list:
    result = []
    for error in errors:
        # drop the "body"/"query" prefix FastAPI puts in front of the field path
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        result.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return result


def _envelope(status_code: int, message: str, data=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "status_code": status_code, "data": data},
    )


async def newsdesk_error_handler(request: Request, exc: NewsDeskError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected with {exc.status_code}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} invalid request: {exc.errors()}")
    return _envelope(400, ValidationFailure.default_message, _field_errors(exc.errors()))


async def model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} invalid parameters: {exc.errors()}")
    return _envelope(400, ValidationFailure.default_message, _field_errors(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _envelope(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _envelope(500, NewsDeskError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NewsDeskError, newsdesk_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, model_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
