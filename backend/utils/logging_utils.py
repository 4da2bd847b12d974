"""
Logging Utilities

Process-wide logging setup plus helpers for adding request-scoped context
to log messages.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from exceptions import ValidationError


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})


def configure_logging(level: str = 'INFO', log_file: Optional[str] = None) -> logging.Logger:
    """
    Install console (and optionally rotating file) handlers on the root logger.

    Args:
        level: Root log level name
        log_file: Path of a log file; rotated at 10MB, 5 backups kept

    Returns:
        The configured root logger
    """
    log_formatter = logging.Formatter(LOG_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        if getattr(handler, '_campus_community', False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._campus_community = True
    root_logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(log_formatter)
        file_handler._campus_community = True
        root_logger.addHandler(file_handler)

    root_logger.debug(f"Logging initialized at {level}" + (f": {log_file}" if log_file else ""))
    return root_logger


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("User signed up", extra={
            "user_id": user.id,
            "operation": "signup",
        })
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


@contextmanager
def logging_context(**kwargs):
    """
    Add key-value pairs to the log context for the duration of a block.

    The previous context is restored on exit.

    Example:
        with logging_context(request_id="abc-123", operation="signup"):
            ...
    """
    token = _logging_context.set({**_logging_context.get(), **kwargs})
    try:
        yield
    finally:
        _logging_context.reset(token)


def log_operation(operation_name: str):
    """
    Decorator logging the start, end and failure of an operation.

    Keyword arguments named like identifiers (user_id, school_id, username)
    are copied into the log context.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context = {"operation": operation_name}
            for key in ["user_id", "school_id", "username"]:
                if key in kwargs:
                    context[key] = kwargs[key]

            logger.info(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
                logger.info(f"Completed {operation_name}", extra=context)
                return result
            except ValidationError as e:
                context["invalid_fields"] = e.invalid_fields
                logger.warning(f"Rejected {operation_name}", extra=context)
                raise
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise

        return wrapper

    return decorator
