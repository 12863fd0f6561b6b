"""
Payment routes.

Handles:
- /api/payments - List a user's payments, or start one (pending)
- /api/payments/<id> - Update status or attach the gateway id
- /api/payments/callback - Outcome reported by the payment gateway
"""

from flask import Blueprint, request

from routes.helpers import (
    api_response,
    json_body,
    optional_int,
    parse_float,
    parse_int,
    require,
    sanitize_text,
    service,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

payments_bp = Blueprint("payments", __name__)

MAX_GATEWAY_ID_LENGTH = 128


def _gateway_id(data):
    value = data.get("externalPaymentId", data.get("gatewayId"))
    return sanitize_text(value, MAX_GATEWAY_ID_LENGTH) or None


@payments_bp.route("/api/payments", methods=["GET"])
def list_payments():
    """Payments of ?userId=, newest first."""
    user_id = parse_int(require(request.args, "userId"), "userId")
    service("USER_SERVICE").get(user_id)
    return api_response([p.to_dict() for p in service("PAYMENT_SERVICE").list_by_user(user_id)])


@payments_bp.route("/api/payments", methods=["POST"])
def create_payment():
    """
    Body: userId, and printJobId and/or amount. Without an amount the
    job's cost is charged.
    """
    data = json_body()
    amount = data.get("amount")
    payment = service("PAYMENT_SERVICE").create(
        user_id=parse_int(require(data, "userId"), "userId"),
        amount=parse_float(amount, "amount") if amount not in (None, "") else None,
        print_job_id=optional_int(data, "printJobId"),
        gateway_id=_gateway_id(data),
        currency=sanitize_text(data.get("currency"), 8).upper() or None,
    )
    return api_response(payment.to_dict(), 201)


@payments_bp.route("/api/payments/<int:payment_id>", methods=["PUT"])
def update_payment(payment_id: int):
    data = json_body()
    payment = service("PAYMENT_SERVICE").update(
        payment_id,
        status=data.get("status"),
        gateway_id=_gateway_id(data),
    )
    return api_response(payment.to_dict())


@payments_bp.route("/api/payments/callback", methods=["POST"])
def gateway_callback():
    """Body: externalPaymentId and status (completed or cancelled)."""
    data = json_body()
    gateway_id = sanitize_text(require(data, "externalPaymentId"), MAX_GATEWAY_ID_LENGTH)
    payment = service("PAYMENT_SERVICE").apply_gateway_callback(gateway_id, require(data, "status"))
    return api_response(payment.to_dict())
