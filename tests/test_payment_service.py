"""Unit tests for payments and gateway callbacks."""

import pytest

from core.exceptions import ConflictError, NotFoundError, ValidationError
from models.payment import PaymentStatus
from services.payment_service import PaymentService


# Fixtures

@pytest.fixture
def payments(storage, tracker):
    return PaymentService(storage, tracker, currency="INR")


@pytest.fixture
def job(tracker, make_job):
    return tracker.create(make_job())


class TestCreate:

    def test_amount_defaults_to_job_cost(self, payments, user, job):
        payment = payments.create(user.id, print_job_id=job.id, gateway_id="pay_1")
        assert payment.amount == job.cost
        assert payment.status is PaymentStatus.PENDING
        assert payment.currency == "INR"

    def test_mirrors_onto_job(self, payments, tracker, user, job):
        payment = payments.create(user.id, print_job_id=job.id)
        stored = tracker.get(job.id)
        assert stored.payment_id == str(payment.id)
        assert stored.payment_status == "pending"

    def test_standalone_payment_needs_amount(self, payments, user):
        with pytest.raises(ValidationError):
            payments.create(user.id)
        assert payments.create(user.id, amount=99.0).amount == 99.0

    def test_non_positive_amount(self, payments, user):
        with pytest.raises(ValidationError):
            payments.create(user.id, amount=0)

    def test_unknown_user(self, payments):
        with pytest.raises(NotFoundError):
            payments.create(42, amount=1.0)

    def test_job_of_another_user(self, payments, other_user, job):
        with pytest.raises(ValidationError):
            payments.create(other_user.id, print_job_id=job.id)


class TestGatewayCallback:

    def test_completed(self, payments, tracker, user, job):
        payments.create(user.id, print_job_id=job.id, gateway_id="pay_1")
        payment = payments.apply_gateway_callback("pay_1", "completed")
        assert payment.status is PaymentStatus.COMPLETED
        assert tracker.get(job.id).payment_status == "completed"

    def test_unknown_gateway_id(self, payments):
        with pytest.raises(NotFoundError):
            payments.apply_gateway_callback("pay_missing", "completed")

    def test_pending_is_not_a_callback_outcome(self, payments, user):
        payments.create(user.id, amount=5.0, gateway_id="pay_1")
        with pytest.raises(ValidationError):
            payments.apply_gateway_callback("pay_1", "pending")

    def test_repeat_is_idempotent(self, payments, user):
        payments.create(user.id, amount=5.0, gateway_id="pay_1")
        payments.apply_gateway_callback("pay_1", "completed")
        assert payments.apply_gateway_callback("pay_1", "completed").status is PaymentStatus.COMPLETED

    def test_conflicting_outcome(self, payments, user):
        payments.create(user.id, amount=5.0, gateway_id="pay_1")
        payments.apply_gateway_callback("pay_1", "cancelled")
        with pytest.raises(ConflictError):
            payments.apply_gateway_callback("pay_1", "completed")


class TestUpdate:

    def test_attach_gateway_id_then_complete(self, payments, user):
        payment = payments.create(user.id, amount=5.0)
        payments.update(payment.id, gateway_id="pay_9")
        updated = payments.update(payment.id, status="completed")
        assert updated.gateway_id == "pay_9"
        assert updated.status is PaymentStatus.COMPLETED

    def test_unknown_payment(self, payments):
        with pytest.raises(NotFoundError):
            payments.update(5, status="completed")

    def test_list_by_user(self, payments, user, other_user):
        payments.create(user.id, amount=1.0)
        payments.create(user.id, amount=2.0)
        payments.create(other_user.id, amount=3.0)
        assert [p.amount for p in payments.list_by_user(user.id)] == [2.0, 1.0]
