"""Shared fixtures: storage and services wired like create_app(), plus a test client."""

import pytest

from app import create_app
from models.document import Document
from models.print_job import PrintJob
from models.print_settings import PrintSettings, TokenType
from models.printer import Printer
from models.user import User
from modules.estimator import PriceQuoter
from services.job_tracker import PrintJobTracker
from services.storage import MemoryStorage
from services.token_service import TokenService


ADMIN_KEY = "test-admin-key"


# Fixtures

@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def quoter():
    return PriceQuoter(priority_token_fee=1.50, currency="INR")


@pytest.fixture
def tokens():
    return TokenService(normal_capacity=50, priority_capacity=20, normal_max_pages=20, priority_max_pages=80)


@pytest.fixture
def tracker(storage, quoter, tokens):
    return PrintJobTracker(storage, quoter, tokens)


@pytest.fixture
def user(storage):
    return storage.add_user(User(username="asha", email="asha@example.com"))


@pytest.fixture
def other_user(storage):
    return storage.add_user(User(username="ravi", email="ravi@example.com"))


@pytest.fixture
def document(storage, user):
    """A 5-page PDF owned by `user`."""
    return storage.add_document(Document(
        user_id=user.id,
        name="thesis.pdf",
        file_path="/tmp/thesis.pdf",
        file_type="pdf",
        estimated_pages=5,
        file_size_bytes=500 * 1024,
    ))


@pytest.fixture
def printer(storage):
    return storage.add_printer(Printer(
        name="PrintShop Downtown",
        address="123 Main St, Suite 101",
        latitude=12.9716,
        longitude=77.5946,
    ))


@pytest.fixture
def closed_printer(storage):
    return storage.add_printer(Printer(
        name="University Print Center",
        address="789 College Blvd",
        latitude=12.9656,
        longitude=77.5876,
        is_open=False,
    ))


@pytest.fixture
def make_job(user, document, printer):
    """Factory for an unsaved job on `document` at `printer`."""
    def _make(token_type=TokenType.NORMAL, **settings):
        return PrintJob(
            user_id=user.id,
            document_id=document.id,
            printer_id=printer.id,
            settings=PrintSettings(**settings),
            token_type=token_type,
        )
    return _make


@pytest.fixture
def app(tmp_path):
    """Flask app under TestingConfig (worker thread not started)."""
    return create_app("config.TestingConfig", {"UPLOAD_FOLDER": str(tmp_path / "uploads")})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_KEY}"}
