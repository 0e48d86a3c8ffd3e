from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from eventhub.platform.exception.exceptions import CustomBaseError, InternalError
from eventhub.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _detail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'detail': message})


def _describe_validation_error(error: dict[str, Any]) -> str:
    # ('body', 'ticketsBooked') -> 'ticketsBooked: Input should be a valid integer'
    field = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
    message = error.get('msg', 'Invalid request')
    return f'{field}: {message}' if field else message


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, CustomBaseError):
        return await general_500_exception_handler(request, exc)
    if isinstance(exc, InternalError):
        Logger.base.error(f'💥 [{request.method} {request.url.path}] {exc.detail or exc!r}')
    return _detail(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = _describe_validation_error(errors[0]) if errors else 'Invalid request'
    return _detail(status.HTTP_400_BAD_REQUEST, message)


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.opt(exception=exc).error(
        f'💥 [{request.method} {request.url.path}] Unhandled {type(exc).__name__}: {exc}'
    )
    return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
