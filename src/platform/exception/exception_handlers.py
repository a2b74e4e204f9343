from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _detail(status_code: int, detail: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'detail': detail})


def _already_logged(exc: Exception) -> bool:
    return getattr(exc, '_has_logged', False)


async def reading_room_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, CustomBaseError):
        exc = CustomBaseError(str(exc))
    if not _already_logged(exc):
        Logger.base.warning(
            f'{request.method} {request.url.path} -> {exc.status_code} {exc.message}'
        )
    return _detail(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    # ctx can hold the raw exception object, which is not JSON encodable
    return _detail(
        status.HTTP_400_BAD_REQUEST,
        [{key: value for key, value in err.items() if key != 'ctx'} for err in errors],
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not _already_logged(exc):
        Logger.base.exception(f'{request.method} {request.url.path} failed: {exc}')
    return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: reading_room_error_handler,
    RequestValidationError: request_validation_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
