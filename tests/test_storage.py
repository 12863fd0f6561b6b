"""Unit tests for MemoryStorage."""

from datetime import datetime, timedelta, timezone

import pytest

from models.document import Document
from models.payment import Payment
from models.user import User


def _doc(user_id, name, created_at=None):
    return Document(
        user_id=user_id, name=name, file_path=f"/tmp/{name}", file_type="pdf",
        estimated_pages=1, created_at=created_at,
    )


class TestMemoryStorage:

    def test_add_assigns_id_and_timestamp(self, storage):
        user = storage.add_user(User(username="a", email="a@example.com"))
        assert user.id == 1
        assert user.created_at is not None
        assert storage.add_user(User(username="b", email="b@example.com")).id == 2

    def test_ids_are_per_entity(self, storage, user):
        doc = storage.add_document(_doc(user.id, "x.pdf"))
        assert doc.id == 1

    def test_returned_objects_are_copies(self, storage, user):
        user.name = "changed"
        assert storage.get_user(user.id).name is None

        stored = storage.get_user(user.id)
        stored.plan = "pro"
        assert storage.get_user(user.id).plan == "free"

    def test_save_persists_changes(self, storage, user):
        user.plan = "pro"
        storage.save_user(user)
        assert storage.get_user(user.id).plan == "pro"

    def test_save_unknown_raises(self, storage):
        with pytest.raises(KeyError):
            storage.save_user(User(username="ghost", email="g@example.com", id=99))

    def test_document_round_trip(self, storage, user):
        created = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        stored = storage.add_document(Document(
            user_id=user.id,
            name="thesis.pdf",
            file_path="/srv/uploads/20240301093000000000_thesis.pdf",
            file_type="pdf",
            estimated_pages=12,
            file_size_bytes=61440,
            counted_pages=11,
            created_at=created,
            last_printed=created + timedelta(days=2),
        ))

        fetched = storage.get_document(stored.id)

        assert fetched == stored
        assert fetched is not stored
        assert fetched.counted_pages == 11
        assert fetched.file_size_bytes == 61440
        assert fetched.created_at == created

    def test_get_missing_returns_none(self, storage):
        assert storage.get_document(42) is None

    def test_documents_newest_first(self, storage, user, other_user):
        now = datetime.now(timezone.utc)
        storage.add_document(_doc(user.id, "old.pdf", now - timedelta(hours=1)))
        storage.add_document(_doc(user.id, "new.pdf", now))
        storage.add_document(_doc(other_user.id, "theirs.pdf", now))

        names = [d.name for d in storage.list_documents(user_id=user.id)]
        assert names == ["new.pdf", "old.pdf"]

    def test_equal_timestamps_break_ties_by_id(self, storage, user):
        now = datetime.now(timezone.utc)
        first = storage.add_document(_doc(user.id, "a.pdf", now))
        second = storage.add_document(_doc(user.id, "b.pdf", now))
        assert [d.id for d in storage.list_documents(user_id=user.id)] == [second.id, first.id]

    def test_delete(self, storage, user):
        doc = storage.add_document(_doc(user.id, "x.pdf"))
        assert storage.delete_document(doc.id) is True
        assert storage.delete_document(doc.id) is False
        assert storage.get_document(doc.id) is None

    def test_lookup_by_unique_fields(self, storage, user):
        assert storage.get_user_by_username("asha").id == user.id
        assert storage.get_user_by_email("asha@example.com").id == user.id
        assert storage.get_user_by_external_uid("nope") is None

    def test_payment_by_gateway_id(self, storage, user):
        payment = storage.add_payment(Payment(user_id=user.id, amount=10.0, gateway_id="pay_1"))
        assert payment.updated_at == payment.created_at
        assert storage.get_payment_by_gateway_id("pay_1").id == payment.id
        assert storage.get_payment_by_gateway_id("pay_2") is None

    def test_transaction_is_reentrant(self, storage, user):
        with storage.transaction():
            with storage.transaction():
                assert storage.get_user(user.id) is not None
