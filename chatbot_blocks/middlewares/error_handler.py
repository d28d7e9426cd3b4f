import asyncio
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError
from starlette.middleware.base import BaseHTTPMiddleware

from chatbot_blocks.dto.response import ResponseModel
from chatbot_blocks.exceptions.api_exceptions import TransientException
from chatbot_blocks.exceptions.base_exception import AppException
from chatbot_blocks.validations.result import describe_errors

logger = logging.getLogger(__name__)


def envelope(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ResponseModel.fail(code=code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return envelope(exc.status_code, exc.error_code, exc.message, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON bodies and similar shape errors caught by FastAPI itself
    reasons = describe_errors(exc)
    return envelope(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Validation error", reasons)


async def database_error_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return envelope(status.HTTP_409_CONFLICT, "CONFLICT", "Request conflicts with existing data")

    logger.warning("Database failure on %s %s: %s", request.method, request.url.path, exc.orig)
    transient = TransientException()
    return envelope(transient.status_code, transient.error_code, transient.message)


async def timeout_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Timed out on %s %s", request.method, request.url.path)
    transient = TransientException()
    return envelope(transient.status_code, transient.error_code, transient.message)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence: anything not handled above becomes a generic 500
    without leaking internals.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except AppException as e:
            return envelope(e.status_code, e.error_code, e.message, e.details)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return envelope(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_SERVER_ERROR",
                "Internal server error",
            )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DBAPIError, database_error_handler)
    # Distinct classes before Python 3.11
    app.add_exception_handler(TimeoutError, timeout_handler)
    app.add_exception_handler(asyncio.TimeoutError, timeout_handler)
    app.add_middleware(ErrorHandlerMiddleware)
