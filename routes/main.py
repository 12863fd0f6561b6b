"""
Main routes (recommendations, dashboards, contact, health).

Handles:
- /api/ai-recommendation/<documentId> - Suggested settings for a document
- /api/dashboard/stats/<userId> - Per-user summary
- /api/admin/metrics - Shop-wide figures (admin)
- /api/admin/contact-forms - Submitted contact forms (admin)
- /api/contact - Contact form
- /health - Health check endpoint
"""

from flask import Blueprint, current_app

from modules.advisor import recommend_for_document
from routes.helpers import (
    api_response,
    json_body,
    require,
    require_admin_key,
    sanitize_text,
    service,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

main_bp = Blueprint("main", __name__)


@main_bp.route("/api/ai-recommendation/<int:document_id>", methods=["GET"])
def ai_recommendation(document_id: int):
    """
    Suggested settings for a document.

    An unknown document id gets the eco-friendly default rather than a 404.
    """
    document = current_app.config["STORAGE"].get_document(document_id)
    if document is None:
        logger.debug(f"Recommendation for unknown document {document_id}: using default")
    return api_response(recommend_for_document(document).to_dict())


@main_bp.route("/api/dashboard/stats/<int:user_id>", methods=["GET"])
def dashboard_stats(user_id: int):
    service("USER_SERVICE").get(user_id)
    return api_response(service("METRICS_SERVICE").dashboard(user_id).to_dict())


@main_bp.route("/api/admin/metrics", methods=["GET"])
def admin_metrics():
    require_admin_key()
    metrics = service("METRICS_SERVICE").admin().to_dict()
    metrics["tokens"] = service("TOKEN_SERVICE").availability()
    metrics["pendingEvents"] = service("JOB_EVENT_WORKER").pending_count
    return api_response(metrics)


@main_bp.route("/api/admin/contact-forms", methods=["GET"])
def contact_forms():
    require_admin_key()
    return api_response([form.to_dict() for form in service("SUPPORT_SERVICE").list_all()])


@main_bp.route("/api/contact", methods=["POST"])
def contact():
    data = json_body()
    form = service("SUPPORT_SERVICE").submit(
        name=sanitize_text(require(data, "name"), 100),
        email=sanitize_text(require(data, "email"), 200),
        subject=sanitize_text(require(data, "subject"), 200),
        message=sanitize_text(require(data, "message")),
    )
    return api_response(form.to_dict(), 201)


@main_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {},
    }

    worker = current_app.config.get("JOB_EVENT_WORKER")
    if worker is None:
        health_status["checks"]["job_events"] = "not_available"
        health_status["status"] = "degraded"
    elif worker.is_running:
        health_status["checks"]["job_events"] = "running"
    elif current_app.config.get("JOB_EVENT_WORKER_ENABLED"):
        health_status["checks"]["job_events"] = "stopped"
        health_status["status"] = "degraded"
    else:
        health_status["checks"]["job_events"] = "disabled"

    printers = service("PRINTER_DIRECTORY").list_all()
    health_status["checks"]["printers"] = len(printers)

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code
