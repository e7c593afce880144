# ABOUTME: Logging configuration using loguru
# ABOUTME: Dual-mode operation: interactive CLI (file logs) vs production JSON logs on stderr; structlog feeds loguru

import logging
import os
import sys
import time
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

LOG_DIR = Path("logs")

# Libraries whose chatter would otherwise drown out our own records
THIRD_PARTY_LOGGERS = ["httpx", "httpcore", "sqlalchemy", "sqlalchemy.engine", "asyncio"]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("OSRSWIKI_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


class LoguruOutputLogger:
    """structlog output logger that hands rendered events to the loguru sinks."""

    def __init__(self, name: str | None = None):
        self.name = name or "osrswiki"
        self._logger = logger.patch(lambda record: record.update(name=self.name))

    def _log(self, level: str, message: str) -> None:
        self._logger.log(level, message)

    def debug(self, message: str) -> None:
        self._log("DEBUG", message)

    def info(self, message: str) -> None:
        self._log("INFO", message)

    def warning(self, message: str) -> None:
        self._log("WARNING", message)

    def error(self, message: str) -> None:
        self._log("ERROR", message)

    def critical(self, message: str) -> None:
        self._log("CRITICAL", message)

    msg = info
    warn = warning
    fatal = critical


def setup_structlog(numeric_level: int) -> None:
    """Route structlog events through loguru so both share the same sinks."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=LoguruOutputLogger,
        cache_logger_on_first_use=False,
    )


def setup_third_party_logging() -> None:
    """Lower third-party library logging so it doesn't interfere with CLI output."""
    for logger_name in THIRD_PARTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def _ensure_log_dir(max_retries: int = 3) -> bool:
    for attempt in range(max_retries):
        try:
            LOG_DIR.mkdir(exist_ok=True)
            return True
        except OSError:
            if attempt == max_retries - 1:
                return False
            time.sleep(0.01 * (attempt + 1))
    return False


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(numeric_level)

    logger.remove()
    setup_structlog(numeric_level)

    # Interactive mode falls back to stderr JSON when the log directory can't be created
    if mode == LoggingMode.INTERACTIVE and not _ensure_log_dir():
        mode = LoggingMode.PRODUCTION

    if mode == LoggingMode.PRODUCTION:
        logger.add(
            sys.stderr, level=log_level.upper(), format="{time} | {level} | {name} | {message}", serialize=True
        )
        return

    log_file_path = log_file or str(LOG_DIR / "osrswiki.log")

    logger.add(
        log_file_path,
        level=log_level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        rotation="10 MB",
        retention="7 days",
    )

    logger.add(
        LOG_DIR / "errors.log",
        level="ERROR",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        backtrace=True,
        diagnose=False,
    )


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode()
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(LOG_DIR.absolute()) if LOG_DIR.exists() else None,
        "log_files": {
            "main": str(LOG_DIR / "osrswiki.log") if interactive else None,
            "errors": str(LOG_DIR / "errors.log") if interactive else None,
        },
        "third_party_suppressed": list(THIRD_PARTY_LOGGERS),
    }
