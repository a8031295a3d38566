"""Map raised errors to the JSON error body `{"detail": ...}` used by every endpoint.

Availability rejections also carry `reason` (out_of_hours, lead_time, horizon,
conflict) so a client can tell which rule refused the slot.
"""

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import AvailabilityError, CustomBaseError
from src.platform.logging.loguru_io import Logger

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _error_response(status_code: int, detail: Any, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'detail': detail, **extra})


async def business_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, CustomBaseError):
        return await unhandled_error_handler(request, exc)
    return _error_response(exc.status_code, exc.message)


async def availability_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, AvailabilityError):
        return await business_error_handler(request, exc)
    return _error_response(exc.status_code, exc.message, reason=exc.reason.value)


async def bad_value_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    # Malformed bodies are client input errors, reported as 400 rather than FastAPI's 422
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return _error_response(status.HTTP_400_BAD_REQUEST, jsonable_encoder(errors))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not getattr(exc, '_has_logged', False):
        Logger.base.opt(exception=exc).error(
            f'Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
        )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


# Starlette resolves handlers along the exception MRO, most specific class first
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    AvailabilityError: availability_error_handler,
    CustomBaseError: business_error_handler,
    ValueError: bad_value_handler,
    RequestValidationError: request_validation_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
