"""
Centralized logging configuration for PrintMe Web.

Every record carries the thread name and, when emitted while a Flask request
is being handled, a short request id. That makes it possible to follow one
API call, or the background job-event worker, through interleaved output
from the threaded development server.

Features:
    - Thread name and request id in all log messages
    - Console output (always enabled)
    - Rotating file logs (optional, for production)
    - Separate error log for ERROR/CRITICAL messages
    - Helper functions for getting loggers with consistent naming

Log Format:
    2026-10-18 10:15:30 [INFO    ] [MainThread] [-       ] app - Starting application
    2026-10-18 10:15:31 [INFO    ] [Thread-3  ] [4f1c9a2e] routes.print_jobs - Job 7 created
    2026-10-18 10:15:32 [INFO    ] [JobEvents ] [-       ] job.7 - pending -> printing

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)

    # For lifecycle events of one print job
    job_logger = get_job_logger(job_id)
"""

import logging
import sys
import threading
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import g, has_request_context


APP_LOGGER_NAME = "printme_web"


# =============================================================================
# CONTEXT FILTER
# =============================================================================

class RequestContextFilter(logging.Filter):
    """
    Logging filter that adds thread and request context to all log records.

    Attributes added to each record:
        - thread_name: Name of the current thread
        - request_id: Short id of the active Flask request, "-" outside one
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        record.request_id = get_request_id() or "-"
        # Never filters anything out
        return True


def get_request_id() -> Optional[str]:
    """
    Return the id of the current request, assigning one on first use.

    Returns:
        8-character hex id, or None outside a request context
    """
    if not has_request_context():
        return None
    request_id = g.get("request_id")
    if request_id is None:
        request_id = uuid.uuid4().hex[:8]
        g.request_id = request_id
    return request_id


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure application logging with request context.

    This sets up:
    1. Console handler (always enabled)
    2. Rotating file handler (optional) - for persistent logs
    3. Error file handler (optional) - for ERROR/CRITICAL only
    4. Context filter - adds thread name and request id to all messages

    Args:
        app_name: Name of the application logger (default: "printme_web")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write to log files (default: True)

    Returns:
        Configured application logger
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Prevent duplicate logs to root logger

    # Allows re-configuration (app factory is called once per test)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(thread_name)-10s] [%(request_id)-8s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    context_filter = RequestContextFilter()

    # ---------------------------------------------------------------------
    # Console Handler (always enabled)
    # ---------------------------------------------------------------------
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    logger.addHandler(console_handler)

    # ---------------------------------------------------------------------
    # File Handlers (optional)
    # ---------------------------------------------------------------------
    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        file_handler = RotatingFileHandler(
            filename=app_log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB per file
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        logger.addHandler(file_handler)

        error_log_file = log_dir / f"{app_name}_error.log"
        error_handler = RotatingFileHandler(
            filename=error_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(context_filter)
        logger.addHandler(error_handler)

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger under the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger named "printme_web.<name>"

    Example:
        # In services/job_tracker.py
        logger = get_logger(__name__)
        # Logger name: "printme_web.services.job_tracker"
    """
    if not name.startswith(APP_LOGGER_NAME):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def get_job_logger(job_id) -> logging.Logger:
    """
    Get a logger for the lifecycle events of one print job.

    Args:
        job_id: Print job id

    Returns:
        Logger named "printme_web.job.<job_id>"
    """
    return logging.getLogger(f"{APP_LOGGER_NAME}.job.{job_id}")


def set_thread_name(name: str) -> None:
    """
    Set the name of the current thread.

    This name appears in log messages in the [thread_name] field.
    """
    threading.current_thread().name = name
