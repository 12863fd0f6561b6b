"""
Print job routes.

Handles:
- /api/print-jobs/quote - Price a job before booking
- /api/print-jobs - List a user's jobs / create a job
- /api/print-jobs/<id> - Fetch / cancel a job
- /api/print-jobs/<id>/status - Direct status update
- /api/print-jobs/<id>/events - Queue a printer/operator event
- /api/tokens - Token availability

The job cost is always computed on the server; a client-supplied cost is
ignored.
"""

from flask import Blueprint, request

from core.exceptions import ValidationError
from models.print_job import JobStatus, PrintJob
from models.print_settings import PrintSettings, TokenType, parse_choice
from services.job_event_worker import JobEvent
from routes.helpers import (
    api_response,
    json_body,
    optional_int,
    parse_int,
    require,
    sanitize_text,
    service,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

print_jobs_bp = Blueprint("print_jobs", __name__)

EVENT_SOURCES = ("printer", "operator")


def _settings(data) -> PrintSettings:
    settings = PrintSettings.from_dict(data)
    if settings.copies < 1:
        raise ValidationError("copies must be at least 1", field="copies")
    return settings


@print_jobs_bp.route("/api/print-jobs/quote", methods=["POST"])
def quote():
    """
    Quote a job.

    Body: documentId (pages taken from the document) or pages, plus the
    print settings and tokenType.
    """
    data = json_body()
    settings = _settings(data)
    token_type = parse_choice(TokenType, data.get("tokenType", "normal"), "tokenType")

    document_id = optional_int(data, "documentId")
    if document_id is not None:
        pages = service("DOCUMENT_SERVICE").get(document_id).estimated_pages
    else:
        pages = parse_int(require(data, "pages"), "pages", minimum=0)

    result = service("PRICE_QUOTER").quote(pages, settings, token_type)
    return api_response(result)


@print_jobs_bp.route("/api/print-jobs", methods=["GET"])
def list_jobs():
    user_id = parse_int(require(request.args, "userId"), "userId")
    jobs = service("JOB_TRACKER").list_by_user(user_id)
    return api_response([job.to_dict() for job in jobs])


@print_jobs_bp.route("/api/print-jobs", methods=["POST"])
def create_job():
    data = json_body()
    job = PrintJob(
        user_id=parse_int(require(data, "userId"), "userId"),
        document_id=parse_int(require(data, "documentId"), "documentId"),
        printer_id=optional_int(data, "printerId"),
        settings=_settings(data),
        token_type=parse_choice(TokenType, data.get("tokenType", "normal"), "tokenType"),
    )
    created = service("JOB_TRACKER").create(job)
    return api_response(created.to_dict(), 201)


@print_jobs_bp.route("/api/print-jobs/<int:job_id>", methods=["GET"])
def get_job(job_id: int):
    return api_response(service("JOB_TRACKER").get(job_id).to_dict())


@print_jobs_bp.route("/api/print-jobs/<int:job_id>/status", methods=["PUT"])
def update_status(job_id: int):
    data = json_body()
    job = service("JOB_TRACKER").update_status(
        job_id,
        require(data, "status"),
        sanitize_text(data.get("errorMessage")) or None,
    )
    return api_response(job.to_dict())


@print_jobs_bp.route("/api/print-jobs/<int:job_id>/events", methods=["POST"])
def post_event(job_id: int):
    """
    Queue a status event for the background worker.

    The job and status are validated now; the transition itself is checked
    when the worker applies the event. Returns 202.
    """
    data = json_body()
    status = parse_choice(JobStatus, require(data, "status"), "status")
    source = _event_source(data.get("source", "printer"))

    service("JOB_TRACKER").get(job_id)

    event = JobEvent(
        job_id=job_id,
        status=status,
        source=source,
        error_message=sanitize_text(data.get("errorMessage")) or None,
    )
    service("JOB_EVENT_WORKER").submit(event)
    return api_response(event.to_dict(), 202)


@print_jobs_bp.route("/api/print-jobs/<int:job_id>", methods=["DELETE"])
def cancel_job(job_id: int):
    """Cancel (remove) a job that is still in the printer queue."""
    job = service("JOB_TRACKER").delete(job_id)
    return api_response({"id": job.id, "deleted": True, "status": job.status.value})


@print_jobs_bp.route("/api/tokens", methods=["GET"])
def token_availability():
    return api_response(service("TOKEN_SERVICE").availability())


def _event_source(value) -> str:
    source = str(value).lower()
    if source not in EVENT_SOURCES:
        raise ValidationError(f"source must be one of: {', '.join(EVENT_SOURCES)}", field="source")
    return source
