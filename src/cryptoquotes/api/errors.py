"""Map exceptions to ``{"error": "<code>"}`` JSON responses."""

import logging
import traceback

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request
from starlette.responses import JSONResponse

from cryptoquotes.exceptions import CooldownActiveError, CryptoQuotesError

logger = logging.getLogger("cryptoquotes.api")


def _log_unhandled(request: Request, exc: Exception) -> None:
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))


async def app_error_handler(request: Request, exc: CryptoQuotesError) -> JSONResponse:
    content: dict = {"error": exc.code}
    if isinstance(exc, CooldownActiveError):
        content["retry_after_seconds"] = exc.retry_after_seconds
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "bad_request"})


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    _log_unhandled(request, exc)
    return JSONResponse(status_code=503, content={"error": "internal_error"})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    _log_unhandled(request, exc)
    return JSONResponse(status_code=503, content={"error": "internal_error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CryptoQuotesError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
