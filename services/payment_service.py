"""
Payment records and gateway callbacks.

The service never calls the payment gateway. The browser completes the
checkout with the gateway, and the gateway (or the client on its behalf)
reports the outcome with the gateway's own payment id. Each status change
is mirrored onto the linked print job's payment fields.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Union

from core.exceptions import ConflictError, NotFoundError, ValidationError
from models.payment import Payment, PaymentStatus
from models.print_settings import parse_choice
from services.job_tracker import PrintJobTracker
from services.storage import Storage
from logging_config import get_logger


logger = get_logger(__name__)


class PaymentService:
    def __init__(self, storage: Storage, tracker: PrintJobTracker, currency: str = "INR"):
        self._storage = storage
        self._tracker = tracker
        self._currency = currency

    def create(
        self,
        user_id: int,
        amount: Optional[float] = None,
        print_job_id: Optional[int] = None,
        gateway_id: Optional[str] = None,
        currency: Optional[str] = None,
    ) -> Payment:
        """
        Start a payment in the pending state.

        When a print job is given and no amount, the job's cost is charged.

        Raises:
            NotFoundError: Unknown user or print job
            ValidationError: Job owned by someone else, or a non-positive amount
        """
        if self._storage.get_user(user_id) is None:
            raise NotFoundError("User", user_id)

        if print_job_id is not None:
            job = self._tracker.get(print_job_id)
            if job.user_id != user_id:
                raise ValidationError("Print job does not belong to this user", field="printJobId")
            if amount is None:
                amount = job.cost

        if amount is None or amount <= 0:
            raise ValidationError("Payment amount must be positive", field="amount")

        payment = self._storage.add_payment(Payment(
            user_id=user_id,
            amount=round(float(amount), 2),
            currency=currency or self._currency,
            print_job_id=print_job_id,
            gateway_id=gateway_id,
        ))
        self._sync_job(payment)
        logger.info(f"Payment {payment.id} started: {payment.amount} {payment.currency} for user {user_id}")
        return payment

    def get(self, payment_id: int) -> Payment:
        payment = self._storage.get_payment(payment_id)
        if payment is None:
            raise NotFoundError("Payment", payment_id)
        return payment

    def list_by_user(self, user_id: int) -> List[Payment]:
        return self._storage.list_payments(user_id=user_id)

    def update(
        self,
        payment_id: int,
        status: Union[PaymentStatus, str, None] = None,
        gateway_id: Optional[str] = None,
    ) -> Payment:
        """Change status and/or attach the gateway's payment id."""
        with self._storage.transaction():
            payment = self.get(payment_id)
            if status is not None:
                self._apply_status(payment, parse_choice(PaymentStatus, status, "status"))
            if gateway_id:
                payment.gateway_id = gateway_id
            payment.updated_at = datetime.now(timezone.utc)
            payment = self._storage.save_payment(payment)

        self._sync_job(payment)
        return payment

    def apply_gateway_callback(self, gateway_id: str, status: Union[PaymentStatus, str]) -> Payment:
        """
        Record the outcome reported by the payment gateway.

        Raises:
            ValidationError: Status other than completed/cancelled
            NotFoundError: No payment carries this gateway id
            ConflictError: Payment already settled with a different outcome
        """
        new_status = parse_choice(PaymentStatus, status, "status")
        if new_status is PaymentStatus.PENDING:
            raise ValidationError("Callback status must be completed or cancelled", field="status")

        with self._storage.transaction():
            payment = self._storage.get_payment_by_gateway_id(gateway_id)
            if payment is None:
                raise NotFoundError("Payment", gateway_id)
            self._apply_status(payment, new_status)
            payment.updated_at = datetime.now(timezone.utc)
            payment = self._storage.save_payment(payment)

        self._sync_job(payment)
        logger.info(f"Gateway reported payment {payment.id} ({gateway_id}) {new_status.value}")
        return payment

    @staticmethod
    def _apply_status(payment: Payment, new_status: PaymentStatus) -> None:
        if payment.status is new_status:
            return
        if payment.status is not PaymentStatus.PENDING:
            raise ConflictError(
                f"Payment already {payment.status.value}",
                {"payment_id": payment.id, "requested": new_status.value},
            )
        payment.status = new_status

    def _sync_job(self, payment: Payment) -> None:
        if payment.print_job_id is not None:
            self._tracker.record_payment(payment.print_job_id, str(payment.id), payment.status.value)
