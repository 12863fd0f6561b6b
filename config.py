"""
Configuration for PrintMe Web.

Values are read from the environment (a .env file is loaded first), so a
deployment can tune pricing, token pools and storage paths without code
changes.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    UPLOAD_FOLDER = os.environ.get(
        "UPLOAD_FOLDER", str(BASE_DIR / "uploads")
    )
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10 MB uploads
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"
    TESTING = False

    # Bearer key for vendor/admin endpoints (printer management, metrics)
    ADMIN_API_KEY = os.environ.get("PRINTME_ADMIN_API_KEY", "printme-admin")

    # ==========================================================================
    # Pricing and token booking
    # ==========================================================================
    # The per-page price formula lives in modules/estimator.py. Only the flat
    # priority surcharge and the token pools are configurable.
    #
    # PRIORITY_TOKEN_FEE: flat fee added on top of the print estimate
    # *_TOKEN_CAPACITY: number of tokens of each tier that can be held at once
    # *_TOKEN_MAX_PAGES: billable page limit (pages x copies) per tier
    # ==========================================================================
    CURRENCY = os.environ.get("PRINTME_CURRENCY", "INR")
    PRIORITY_TOKEN_FEE = float(os.environ.get("PRINTME_PRIORITY_TOKEN_FEE", "1.50"))
    NORMAL_TOKEN_CAPACITY = int(os.environ.get("PRINTME_NORMAL_TOKEN_CAPACITY", "50"))
    PRIORITY_TOKEN_CAPACITY = int(os.environ.get("PRINTME_PRIORITY_TOKEN_CAPACITY", "20"))
    NORMAL_TOKEN_MAX_PAGES = int(os.environ.get("PRINTME_NORMAL_TOKEN_MAX_PAGES", "20"))
    PRIORITY_TOKEN_MAX_PAGES = int(os.environ.get("PRINTME_PRIORITY_TOKEN_MAX_PAGES", "80"))

    # Printer search
    DEFAULT_SEARCH_RADIUS_KM = float(os.environ.get("PRINTME_SEARCH_RADIUS_KM", "10"))
    SEED_SAMPLE_PRINTERS = os.environ.get("PRINTME_SEED_PRINTERS", "1") == "1"

    # Background worker that applies printer/operator status events
    JOB_EVENT_WORKER_ENABLED = os.environ.get("PRINTME_JOB_WORKER", "1") == "1"
    JOB_EVENT_POLL_SECONDS = float(os.environ.get("PRINTME_JOB_WORKER_POLL", "0.5"))


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    ENVIRONMENT = "production"
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    ENVIRONMENT = "testing"
    ADMIN_API_KEY = "test-admin-key"
    JOB_EVENT_WORKER_ENABLED = False
