"""
Logger.io: call-chain logging for use cases, repositories and endpoints.

With DEBUG on, every decorated call logs its (masked) arguments and return value,
indented by how deep it sits in the current chain. Exceptions are logged once, at the
frame where they first pass through a decorated call.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import ExtraField, call_depth_var, custom_logger
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    fetch_layer_depth,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])
_P = ParamSpec('_P')
_T = TypeVar('_T')

# Frames between the decorated function's caller and loguru
_WRAPPER_DEPTH = 3


class LoguruIO:
    def __init__(
        self, bound_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = True
    ) -> None:
        self._logger = bound_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.extra: dict[str, Any] = {}

    def _emit(self, level: str, message: str, *, exception: bool = False) -> None:
        self._logger.bind(**self.extra).opt(depth=_WRAPPER_DEPTH, exception=exception).log(
            level, message
        )

    def _masked(self, data: Any) -> Any:
        if isinstance(data, dict):
            masked: Any = {
                key: self._masked(should_mask_keyword(key, value)) for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            masked = type(data)(self._masked(item) for item in data)
        else:
            masked = mask_sensitive(data)
        return truncate_content(masked) if self.truncate_content else masked

    def _log_exception(self, e: Exception) -> None:
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]
        if isinstance(e, CustomBaseError):
            # Client errors carry no traceback
            level = 'WARNING' if e.status_code < 500 else 'ERROR'
            self._emit(level, f'{type(e).__name__}({e.status_code}): {e.message}')
        else:
            self._emit('ERROR', f'{type(e).__name__}: {e}', exception=True)

    @contextmanager
    def _call(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Iterator[None]:
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        # mask_sensitive walks every argument, skip it unless the line is written
        if settings.DEBUG:
            self._emit(
                'DEBUG',
                f'{fetch_layer_depth()}args: {self._masked(args)}, kwargs: {self._masked(kwargs)}',
            )
        try:
            yield
        except Exception as e:
            self._log_exception(e)
            raise
        finally:
            reset_call_depth()

    def _returned(self, value: Any) -> Any:
        if settings.DEBUG:
            self._emit('DEBUG', f'{fetch_layer_depth()}return: {self._masked(value)}')
        return value

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        # loguru's own frames are trimmed from tracebacks, so borrow its filename
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    with self._call(args, kwargs):
                        args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                        return self._returned(await func(*args, **kwargs))
                except Exception:
                    if self.reraise:
                        raise
                    return None

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                with self._call(args, kwargs):
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    return self._returned(func(*args, **kwargs))
            except Exception:
                if self.reraise:
                    raise
                return None

        return cast(_F, self._hide_from_traceback(sync_wrapper))


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(custom_logger, reraise=reraise, truncate_content=truncate_content)
        return decorator(func) if func else decorator
