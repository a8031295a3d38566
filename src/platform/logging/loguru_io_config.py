"""
Loguru sinks for the reservation service.

Every line carries the service instance, the decorated call target and the
start time of the outermost @Logger.io call, so one request can be followed
through controller, use case and repository.
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

from src.platform.config.core_setting import settings
from src.platform.logging.service_context import get_service_context

# Test runs write under test/test_log
LOG_DIR = os.environ.get('TEST_LOG_DIR', str(settings.LOG_DIR))

# Customer contact details never reach the logs in clear text
SENSITIVE_KEYWORDS = {
    'password',
    'phone',
    'customer_phone',
}

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)

# Stdlib loggers whose DEBUG output is noise here
_QUIET_DEBUG_LOGGERS = ('asyncio', 'aiosqlite', 'httpcore', 'sqlalchemy.pool')


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _default_extra() -> dict[str, str]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


class InterceptHandler(logging.Handler):
    """Forward stdlib records (SQLAlchemy, granian, httpx) into the loguru sinks."""

    def __init__(self, bound_logger: 'LoguruLogger') -> None:
        super().__init__()
        self._bound_logger = bound_logger

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(_QUIET_DEBUG_LOGGERS):
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Point the line at the code that called logging, not at logging itself
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        self._bound_logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _hourly_log_file() -> str:
    opened_at = datetime.now(zoneinfo.ZoneInfo(settings.RESTAURANT_TIMEZONE))
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    return f'{LOG_DIR}/{prefix}{opened_at.strftime("%Y-%m-%d_%H")}.log'


def _configure_sinks() -> 'LoguruLogger':
    loguru_logger.remove()
    bound_logger = loguru_logger.bind(**_default_extra())
    level = 'DEBUG' if settings.DEBUG else 'INFO'

    bound_logger.add(sys.stdout, format=io_log_format, level=level, enqueue=True)
    # Rotated files only while debugging; deployments collect stdout
    if settings.DEBUG:
        bound_logger.add(
            _hourly_log_file(),
            format=io_log_format,
            level=level,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler(bound_logger)], level=0, force=True)
    return bound_logger


custom_logger = _configure_sinks()
