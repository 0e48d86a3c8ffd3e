"""
Loguru sinks for the API process.

Everything lands in one loguru pipeline: ``Logger.base`` calls, ``Logger.io`` call
traces, and standard-library records (granian, sqlalchemy) forwarded by InterceptHandler.
"""

from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING
import zoneinfo

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from eventhub.platform.config.core_setting import settings
from eventhub.platform.constant.path import LOG_DIR
from eventhub.platform.logging.service_context import get_service_context


SENSITIVE_KEYWORDS = frozenset(
    {'password', 'plain_password', 'hashed_password', 'token', 'access_token', 'secret'}
)

# Start time of the outermost traced call in the current task, and the nesting depth below it
chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


LOG_FORMAT = (
    '<c>{extra[service_context]}</> | <lvl>{level:<8}</> | '
    '<c>{file}::{function}:{line}</>=><y>{extra[call_target]}</> | '
    '{message} | <lk>{elapsed}</> | <lk>{extra[chain_start_time]:<18}</>'
)

# DEBUG chatter from these drowns out the application's own traces
_MUTED_DEBUG_LOGGERS = ('aiosqlite', 'asyncio')


class InterceptHandler(logging.Handler):
    """Forward standard-library records to a bound loguru logger"""

    def __init__(self, target: 'LoguruLogger') -> None:
        super().__init__()
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(_MUTED_DEBUG_LOGGERS):
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Step out of the logging module so loguru reports the real call site
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        self.target.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _log_file_path() -> str:
    test_log_dir = os.environ.get('TEST_LOG_DIR')
    stamp = datetime.now(zoneinfo.ZoneInfo(settings.LOG_TIMEZONE)).strftime('%Y-%m-%d_%H')
    if test_log_dir:
        return f'{test_log_dir}/test_{stamp}.log'
    return f'{settings.LOG_DIR or LOG_DIR}/{stamp}.log'


def _configure() -> 'LoguruLogger':
    loguru_logger.remove()
    bound = loguru_logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )
    level = 'DEBUG' if settings.DEBUG else 'INFO'

    bound.add(sys.stdout, format=LOG_FORMAT, level=level, enqueue=True)
    # Production ships stdout to the log collector; files are a local debugging aid
    if settings.DEBUG:
        bound.add(
            _log_file_path(),
            format=LOG_FORMAT,
            level=level,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler(bound)], level=0, force=True)
    logging.getLogger('sqlalchemy.engine').setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )
    return bound


custom_logger = _configure()
