"""
Utility functions and decorators.
"""

from .logging_utils import StructuredLogger, configure_logging, log_operation, logging_context

__all__ = ["StructuredLogger", "configure_logging", "log_operation", "logging_context"]
