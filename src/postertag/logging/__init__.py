"""Structured logging module for postertag.

Provides configurable logging with JSON format support and file rotation.
Includes operation context so every log line of a tag write carries the
file being modified.
"""

from postertag.logging.config import build_logging_config, configure_logging
from postertag.logging.context import (
    OperationContextFilter,
    get_operation_context,
    operation_context,
)
from postertag.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "OperationContextFilter",
    "build_logging_config",
    "configure_logging",
    "get_operation_context",
    "operation_context",
]
