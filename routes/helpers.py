"""
Shared helpers for the JSON API blueprints.

Every endpoint answers with the same envelope:

    {"success": true, "data": ...}
    {"success": false, "error": "message"}

Input shape (required fields, numbers, free text) is checked here before
any service is called. Services are looked up in app.config, where
create_app() stores them.
"""

from __future__ import annotations

import hmac
from typing import Any, Dict, Optional

import bleach
from flask import current_app, jsonify, request

from core.exceptions import AuthorizationError, ValidationError


MAX_TEXT_LENGTH = 2000


def api_response(data: Any = None, status: int = 200):
    """Success envelope."""
    return jsonify({"success": True, "data": data}), status


def error_response(message: str, status: int = 400):
    """Failure envelope."""
    return jsonify({"success": False, "error": message}), status


def service(name: str):
    """Fetch a service registered by create_app() (e.g. 'JOB_TRACKER')."""
    return current_app.config[name]


def json_body() -> Dict[str, Any]:
    """Request JSON object, or ValidationError if there is none."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def sanitize_text(text: Any, max_length: Optional[int] = MAX_TEXT_LENGTH) -> str:
    """
    Strip markup and surrounding whitespace from user-supplied text.

    Args:
        text: Raw input (non-strings become '')
        max_length: Truncate to this many characters

    Returns:
        Text safe for storage and display
    """
    if not text or not isinstance(text, str):
        return ""
    text = bleach.clean(text.strip(), tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


def parse_int(value: Any, field: str, minimum: Optional[int] = None) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer", field=field)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer", field=field)
    if isinstance(value, float) and value != number:
        raise ValidationError(f"{field} must be an integer", field=field)
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}", field=field)
    return number


def parse_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", field=field)
    if number != number or number in (float("inf"), float("-inf")):
        raise ValidationError(f"{field} must be a finite number", field=field)
    return number


def parse_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ValidationError(f"{field} must be true or false", field=field)


def require(data: Dict[str, Any], field: str) -> Any:
    """Value of a required key (None and '' count as missing)."""
    value = data.get(field)
    if value is None or value == "":
        raise ValidationError(f"{field} is required", field=field)
    return value


def optional_int(data: Dict[str, Any], field: str, minimum: Optional[int] = None) -> Optional[int]:
    value = data.get(field)
    if value is None or value == "":
        return None
    return parse_int(value, field, minimum)


def require_admin_key() -> None:
    """
    Check the admin API key sent as 'Authorization: Bearer <key>'.

    Raises:
        AuthorizationError: Header missing or key wrong
    """
    expected = current_app.config.get("ADMIN_API_KEY") or ""
    header = request.headers.get("Authorization", "")
    if not expected or not header.startswith("Bearer "):
        raise AuthorizationError()
    if not hmac.compare_digest(header[7:].encode(), expected.encode()):
        raise AuthorizationError()
