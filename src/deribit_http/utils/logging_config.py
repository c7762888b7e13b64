"""
Logging configuration with millisecond precision

structlog loggers routed through the standard logging module. The library
only emits records; setup_logging() is for applications that want the
console/file handlers with text or JSON output.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from ..config.settings import DeribitSettings

LOGGER_NAME = "deribit_http"


def _add_millisecond_timestamp(logger, method_name, event_dict):
    event_dict["timestamp"] = datetime.now().strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
    return event_dict


_SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


class MillisecondFormatter(structlog.stdlib.ProcessorFormatter):
    """Text formatter that includes milliseconds in timestamps"""

    def __init__(self, fmt: Optional[str] = None):
        super().__init__(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
            foreign_pre_chain=_SHARED_PROCESSORS,
            fmt=fmt,
        )

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created)
        return dt.strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]


class JSONFormatter(structlog.stdlib.ProcessorFormatter):
    """JSON line formatter with millisecond precision"""

    def __init__(self):
        super().__init__(
            processors=[
                _add_millisecond_timestamp,
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
            foreign_pre_chain=_SHARED_PROCESSORS,
        )


def configure_structlog() -> None:
    """Route structlog through stdlib logging"""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_logging(settings: Optional["DeribitSettings"] = None) -> structlog.stdlib.BoundLogger:
    """
    Install console (and optional rotating file) handlers

    Args:
        settings: Source of log_level, log_format and log_file; the global
            settings when omitted

    Returns:
        Configured structlog logger
    """
    if settings is None:
        from ..config.settings import settings as global_settings
        settings = global_settings

    level = getattr(logging, settings.log_level.upper())

    if settings.log_format.lower() == 'json':
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = MillisecondFormatter(
            fmt='%(asctime)s [%(levelname)8s] %(name)s: %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            settings.log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    configure_structlog()

    logger = structlog.get_logger(LOGGER_NAME)
    logger.info(
        "Logging configured",
        log_level=settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file
    )
    return logger


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger

    Leaves an existing structlog configuration alone; otherwise routes
    through stdlib logging so output follows the host's handlers.
    """
    if not structlog.is_configured():
        configure_structlog()
    return structlog.get_logger(name)
