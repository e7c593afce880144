# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Dual-mode (interactive/production) sinks plus context-binding utilities

from .config import LoggingMode, configure_logging, get_logging_status
from .utils import get_logger, log_api_call, with_operation_context, with_store_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "get_logging_status",
    # Utilities
    "get_logger",
    "log_api_call",
    "with_operation_context",
    "with_store_context",
]
