"""
Flask route blueprints for PrintMe Web.

This module contains all route handlers organized by functionality:
- users: Registration, identity-provider sign-in, profiles
- documents: Upload, listing and deletion of documents
- print_jobs: Quotes, job booking, status updates, token availability
- printers: Printer directory and nearby search
- payments: Payment records and gateway callbacks
- main: Recommendations, dashboards, contact form, health

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .users import users_bp
from .documents import documents_bp
from .print_jobs import print_jobs_bp
from .printers import printers_bp
from .payments import payments_bp

__all__ = [
    "main_bp",
    "users_bp",
    "documents_bp",
    "print_jobs_bp",
    "printers_bp",
    "payments_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(documents_bp)
    app.register_blueprint(print_jobs_bp)
    app.register_blueprint(printers_bp)
    app.register_blueprint(payments_bp)
