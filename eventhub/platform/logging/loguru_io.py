from collections.abc import Awaitable
from functools import wraps
from inspect import iscoroutinefunction
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from eventhub.platform.config.core_setting import settings
from eventhub.platform.exception.exceptions import CustomBaseError
from eventhub.platform.logging.loguru_io_config import ExtraField, custom_logger
from eventhub.platform.logging.loguru_io_utils import (
    describe_call_target,
    enter_call,
    leave_call,
    mask_sensitive,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])
_P = ParamSpec('_P')
_T = TypeVar('_T')


class LoguruIO:
    """
    Call tracer: arguments and return values at DEBUG, failures once per exception.

    Domain errors (CustomBaseError) are expected outcomes such as a sold-out event and
    are logged as a one-line warning; anything else gets the full traceback.
    """

    def __init__(
        self, logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = True
    ) -> None:
        self._logger = logger
        self.reraise = reraise
        self.truncate_content = truncate_content

    def _log(
        self, extra: dict[str, Any], level: str, message: str, *, exception: bool = False
    ) -> None:
        # _log <- hook <- wrapper <- caller of the traced function
        self._logger.bind(**extra).opt(depth=3, exception=exception).log(level, message)

    def _before(self, target: str, args: Any, kwargs: Any) -> dict[str, Any]:
        extra = {ExtraField.CALL_TARGET: target, ExtraField.CHAIN_START_TIME: enter_call()}
        if settings.DEBUG:
            self._log(extra, 'DEBUG', f'args: {self.redact(args)}, kwargs: {self.redact(kwargs)}')
        return extra

    def _after(self, extra: dict[str, Any], result: Any) -> None:
        if settings.DEBUG:
            self._log(extra, 'DEBUG', f'return: {self.redact(result)}')

    def _failed(self, extra: dict[str, Any], error: Exception) -> None:
        # Nested traced calls see the same exception on its way out
        if getattr(error, '_has_logged', False):
            return
        error._has_logged = True  # type: ignore[attr-defined]
        if isinstance(error, CustomBaseError):
            self._log(extra, 'WARNING', f'{type(error).__name__}: {error}')
        else:
            self._log(extra, 'ERROR', f'{type(error).__name__}: {error}', exception=True)

    def redact(self, data: Any) -> Any:
        if isinstance(data, dict):
            data = {k: self.redact(should_mask_keyword(k, v)) for k, v in data.items()}
        elif isinstance(data, list | tuple):
            data = type(data)(self.redact(item) for item in data)
        else:
            data = mask_sensitive(data)
        return truncate_content(data) if self.truncate_content else data

    def __call__(self, func: _F) -> _F:
        target = describe_call_target(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                extra = self._before(target, args, kwargs)
                try:
                    result = await cast(Awaitable[Any], func(*args, **kwargs))
                except Exception as e:
                    self._failed(extra, e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    leave_call()
                self._after(extra, result)
                return result

            return cast(_F, async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            extra = self._before(target, args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                self._failed(extra, e)
                if self.reraise:
                    raise
                return None
            finally:
                leave_call()
            self._after(extra, result)
            return result

        return cast(_F, sync_wrapper)


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
        tracer = LoguruIO(custom_logger, reraise=reraise, truncate_content=truncate_content)
        return tracer(func) if func else tracer
