"""
Printer routes.

Handles:
- /api/printers - List all printers / register one (admin)
- /api/printers/nearby - Printers within a radius, nearest first
- /api/printers/<id>/queue - Active jobs at a printer
- /api/printers/<id>/status - Open or close a printer (admin)
"""

from flask import Blueprint, current_app, request

from core.exceptions import ValidationError
from services.printer_directory import validate_coordinates
from routes.helpers import (
    api_response,
    json_body,
    parse_bool,
    parse_float,
    require,
    require_admin_key,
    sanitize_text,
    service,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

printers_bp = Blueprint("printers", __name__)

MAX_FIELD_LENGTH = 200


@printers_bp.route("/api/printers", methods=["GET"])
def list_printers():
    printers = service("PRINTER_DIRECTORY").list_all()
    return api_response([p.to_dict() for p in printers])


@printers_bp.route("/api/printers/nearby", methods=["GET"])
def nearby():
    """
    Printers around ?lat=&lng= within ?radius= km (default from config).

    Missing or unparsable coordinates are a 400; there is no fallback
    location.
    """
    latitude = parse_float(require(request.args, "lat"), "lat")
    longitude = parse_float(require(request.args, "lng"), "lng")
    validate_coordinates(latitude, longitude)

    radius = request.args.get("radius")
    if radius is None or radius == "":
        radius_km = float(current_app.config["DEFAULT_SEARCH_RADIUS_KM"])
    else:
        radius_km = parse_float(radius, "radius")

    locations = service("PRINTER_DIRECTORY").find_nearby(latitude, longitude, radius_km)
    return api_response([location.to_dict() for location in locations])


@printers_bp.route("/api/printers/<int:printer_id>/queue", methods=["GET"])
def printer_queue(printer_id: int):
    service("PRINTER_DIRECTORY").get(printer_id)
    jobs = service("JOB_TRACKER").queue(printer_id)
    return api_response([job.to_dict() for job in jobs])


@printers_bp.route("/api/printers", methods=["POST"])
def create_printer():
    require_admin_key()
    data = json_body()

    features = data.get("features") or {}
    if not isinstance(features, dict):
        raise ValidationError("features must be an object", field="features")

    printer = service("PRINTER_DIRECTORY").create(
        name=sanitize_text(require(data, "name"), MAX_FIELD_LENGTH),
        address=sanitize_text(require(data, "address"), MAX_FIELD_LENGTH),
        latitude=parse_float(require(data, "latitude"), "latitude"),
        longitude=parse_float(require(data, "longitude"), "longitude"),
        is_open=parse_bool(data.get("isOpen", True), "isOpen"),
        features=features,
    )
    return api_response(printer.to_dict(), 201)


@printers_bp.route("/api/printers/<int:printer_id>/status", methods=["PUT"])
def set_printer_status(printer_id: int):
    require_admin_key()
    data = json_body()
    is_open = parse_bool(require(data, "isOpen"), "isOpen")
    printer = service("PRINTER_DIRECTORY").set_open(printer_id, is_open)
    return api_response(printer.to_dict())
