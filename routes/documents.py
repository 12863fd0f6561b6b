"""
Document routes.

Handles file upload, validation and page estimation. This is the only
place that writes uploaded files to disk or removes them.
"""

from datetime import datetime, timezone
from pathlib import Path

from flask import Blueprint, current_app, request
from werkzeug.utils import secure_filename

from core.exceptions import ValidationError
from modules.document_analyzer import ALLOWED_EXTENSIONS, file_extension
from routes.helpers import (
    api_response,
    parse_int,
    require,
    sanitize_text,
    service,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

documents_bp = Blueprint("documents", __name__)

MAX_FILENAME_LENGTH = 255


@documents_bp.route("/api/documents", methods=["GET"])
def list_documents():
    """Documents of ?userId=, newest first."""
    user_id = parse_int(require(request.args, "userId"), "userId")
    documents = service("DOCUMENT_SERVICE").list_by_user(user_id)
    return api_response([d.to_dict() for d in documents])


@documents_bp.route("/api/documents/upload", methods=["POST"])
def upload():
    """
    Accept a multipart upload (fields: file, userId).

    The file is saved under UPLOAD_FOLDER with a timestamp prefix, then
    analyzed for its page estimate. If recording fails the file is removed
    again.
    """
    user_id = parse_int(require(request.form, "userId"), "userId")
    upload_file = request.files.get("file")

    if not upload_file or upload_file.filename == "":
        raise ValidationError("Please choose a file to upload", field="file")
    if len(upload_file.filename) > MAX_FILENAME_LENGTH:
        raise ValidationError(f"Filename too long. Maximum {MAX_FILENAME_LENGTH} characters.", field="file")

    extension = file_extension(upload_file.filename)
    if extension not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"Unsupported file type '{extension or upload_file.filename}'. "
            f"Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
            field="file",
        )

    # Fail before touching the disk if the owner is unknown
    service("USER_SERVICE").get(user_id)

    upload_folder = Path(current_app.config["UPLOAD_FOLDER"])
    upload_folder.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    safe_name = secure_filename(upload_file.filename) or f"upload.{extension}"
    stored_path = upload_folder / f"{timestamp}_{safe_name}"

    logger.info(f"Saving uploaded file: {stored_path.name}")
    upload_file.save(stored_path)

    try:
        analysis = current_app.config["DOCUMENT_ANALYZER"].analyze(stored_path, upload_file.filename)
        document = service("DOCUMENT_SERVICE").record(
            user_id=user_id,
            name=sanitize_text(upload_file.filename, MAX_FILENAME_LENGTH) or safe_name,
            file_path=str(stored_path),
            file_type=analysis["file_type"],
            estimated_pages=analysis["estimated_pages"],
            file_size_bytes=analysis["file_size_bytes"],
            counted_pages=analysis["counted_pages"],
        )
    except Exception:
        stored_path.unlink(missing_ok=True)
        raise

    return api_response(document.to_dict(), 201)


@documents_bp.route("/api/documents/<int:document_id>", methods=["GET"])
def get_document(document_id: int):
    return api_response(service("DOCUMENT_SERVICE").get(document_id).to_dict())


@documents_bp.route("/api/documents/<int:document_id>", methods=["DELETE"])
def delete_document(document_id: int):
    """Delete a document; ?userId= must be the owner."""
    user_id = parse_int(require(request.args, "userId"), "userId")
    document = service("DOCUMENT_SERVICE").delete(document_id, user_id)

    try:
        Path(document.file_path).unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove file for document {document_id}: {e}")

    return api_response({"id": document_id, "deleted": True})
