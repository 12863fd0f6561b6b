"""
PrintMe Web - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration and sets up logging
2. Creates the storage and the services on top of it
3. Seeds the sample printers (optional)
4. Starts the job event worker (separate thread, optional)
5. Registers route blueprints and JSON error handlers

ARCHITECTURE:
    Main Thread
    ├── Flask request handling (threaded)
    └── Cleanup on shutdown (stop worker)

    JobEvents Thread (background)
    └── Applies queued printer/operator status events

All services share one MemoryStorage; its lock serializes mutations.
Services are stored in app.config so routes can reach them through
current_app.
"""

from __future__ import annotations

import atexit
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from logging_config import setup_logging, get_logger
from core.exceptions import PrintMeError
from modules.document_analyzer import DocumentAnalyzer
from modules.estimator import PriceQuoter
from services import (
    DocumentService,
    JobEventWorker,
    MemoryStorage,
    MetricsService,
    PaymentService,
    PrinterDirectory,
    PrintJobTracker,
    SupportService,
    TokenService,
    UserService,
)
from routes import register_blueprints
from routes.helpers import error_response


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def create_app(
    config_object: str = "config.Config",
    overrides: Optional[Dict[str, Any]] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path of the configuration class
        overrides: Extra config values applied last (used by tests)

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PrintMe Web in {app.config.get('ENVIRONMENT')} mode")

    # Ensure upload folder exists
    upload_folder = Path(app.config["UPLOAD_FOLDER"])
    upload_folder.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    storage = MemoryStorage()
    quoter = PriceQuoter(
        priority_token_fee=app.config["PRIORITY_TOKEN_FEE"],
        currency=app.config["CURRENCY"],
    )
    tokens = TokenService(
        normal_capacity=app.config["NORMAL_TOKEN_CAPACITY"],
        priority_capacity=app.config["PRIORITY_TOKEN_CAPACITY"],
        normal_max_pages=app.config["NORMAL_TOKEN_MAX_PAGES"],
        priority_max_pages=app.config["PRIORITY_TOKEN_MAX_PAGES"],
    )
    tracker = PrintJobTracker(storage, quoter, tokens)
    printers = PrinterDirectory(storage)

    app.config["STORAGE"] = storage
    app.config["PRICE_QUOTER"] = quoter
    app.config["TOKEN_SERVICE"] = tokens
    app.config["JOB_TRACKER"] = tracker
    app.config["PRINTER_DIRECTORY"] = printers
    app.config["USER_SERVICE"] = UserService(storage)
    app.config["DOCUMENT_SERVICE"] = DocumentService(storage)
    app.config["PAYMENT_SERVICE"] = PaymentService(storage, tracker, app.config["CURRENCY"])
    app.config["METRICS_SERVICE"] = MetricsService(storage)
    app.config["SUPPORT_SERVICE"] = SupportService(storage)
    app.config["DOCUMENT_ANALYZER"] = DocumentAnalyzer()

    if app.config.get("SEED_SAMPLE_PRINTERS"):
        printers.seed_sample_printers()

    # Job event worker (the queue exists even when the thread is not started)
    job_event_worker = JobEventWorker(
        tracker,
        poll_interval_seconds=app.config["JOB_EVENT_POLL_SECONDS"],
    )
    app.config["JOB_EVENT_WORKER"] = job_event_worker
    if app.config.get("JOB_EVENT_WORKER_ENABLED"):
        job_event_worker.start()

    # =========================================================================
    # CLEANUP REGISTRATION
    # =========================================================================

    def cleanup():
        """Cleanup on application shutdown."""
        logger.info("Shutting down...")
        job_event_worker.stop()
        logger.info("Shutdown complete")

    if job_event_worker.is_running:
        atexit.register(cleanup)

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(PrintMeError)
    def handle_app_error(e: PrintMeError):
        if e.status_code >= 500:
            logger.error(f"{e.__class__.__name__}: {e}", exc_info=True)
        else:
            logger.warning(f"{e.__class__.__name__}: {e}")
        return error_response(e.message, e.status_code)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_mb = app.config.get("MAX_CONTENT_LENGTH", 10 * 1024 * 1024) / (1024 * 1024)
        logger.warning("Rejected upload larger than the size limit")
        return error_response(f"File too large. Maximum upload size is {max_mb:.0f} MB.", 413)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        logger.error(f"Unhandled error: {e}", exc_info=True)
        return error_response("An unexpected error occurred. Please try again.", 500)

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    # Reloader would start a second worker thread in the parent process
    app.run(debug=debug_mode, use_reloader=False, threaded=True)
