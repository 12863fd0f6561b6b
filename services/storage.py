"""
Storage interface and in-memory implementation.

Services never touch dictionaries directly; they talk to a Storage object
injected at startup. MemoryStorage is the only implementation shipped. A
database-backed class implementing the same interface can replace it
without changing the services or routes.

Thread Safety:
    - Flask's development server handles requests on several threads
    - MemoryStorage guards every read and write with one re-entrant lock
    - Services wrap read-check-write sequences in storage.transaction() so
      at most one writer touches an entity at a time
    - Entities are deep-copied on the way in and out; callers persist
      changes explicitly with save_*()

Usage:
    storage = MemoryStorage()
    doc = storage.add_document(Document(...))   # id and created_at assigned
    with storage.transaction():
        job = storage.get_job(job_id)
        job.status = JobStatus.READY
        storage.save_job(job)
"""

from __future__ import annotations

import itertools
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from copy import deepcopy
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional, TypeVar

from models.document import Document
from models.payment import Payment
from models.print_job import PrintJob
from models.printer import Printer
from models.support import ContactForm
from models.user import User
from logging_config import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class Storage(ABC):
    """Persistence operations used by the services."""

    @abstractmethod
    def transaction(self):
        """Context manager serializing a read-check-write sequence."""

    # -- Users ---------------------------------------------------------------

    @abstractmethod
    def add_user(self, user: User) -> User: ...

    @abstractmethod
    def save_user(self, user: User) -> User: ...

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_external_uid(self, external_uid: str) -> Optional[User]: ...

    @abstractmethod
    def list_users(self) -> List[User]: ...

    # -- Documents -----------------------------------------------------------

    @abstractmethod
    def add_document(self, document: Document) -> Document: ...

    @abstractmethod
    def save_document(self, document: Document) -> Document: ...

    @abstractmethod
    def get_document(self, document_id: int) -> Optional[Document]: ...

    @abstractmethod
    def list_documents(self, user_id: Optional[int] = None) -> List[Document]:
        """Documents (of one user, if given), newest first."""

    @abstractmethod
    def delete_document(self, document_id: int) -> bool: ...

    # -- Print jobs ----------------------------------------------------------

    @abstractmethod
    def add_job(self, job: PrintJob) -> PrintJob: ...

    @abstractmethod
    def save_job(self, job: PrintJob) -> PrintJob: ...

    @abstractmethod
    def get_job(self, job_id: int) -> Optional[PrintJob]: ...

    @abstractmethod
    def list_jobs(self, user_id: Optional[int] = None, printer_id: Optional[int] = None) -> List[PrintJob]:
        """Jobs matching the filters, newest first."""

    @abstractmethod
    def delete_job(self, job_id: int) -> bool: ...

    # -- Printers ------------------------------------------------------------

    @abstractmethod
    def add_printer(self, printer: Printer) -> Printer: ...

    @abstractmethod
    def save_printer(self, printer: Printer) -> Printer: ...

    @abstractmethod
    def get_printer(self, printer_id: int) -> Optional[Printer]: ...

    @abstractmethod
    def list_printers(self) -> List[Printer]: ...

    # -- Payments ------------------------------------------------------------

    @abstractmethod
    def add_payment(self, payment: Payment) -> Payment: ...

    @abstractmethod
    def save_payment(self, payment: Payment) -> Payment: ...

    @abstractmethod
    def get_payment(self, payment_id: int) -> Optional[Payment]: ...

    @abstractmethod
    def get_payment_by_gateway_id(self, gateway_id: str) -> Optional[Payment]: ...

    @abstractmethod
    def list_payments(self, user_id: Optional[int] = None) -> List[Payment]: ...

    # -- Contact forms -------------------------------------------------------

    @abstractmethod
    def add_contact_form(self, form: ContactForm) -> ContactForm: ...

    @abstractmethod
    def list_contact_forms(self) -> List[ContactForm]: ...


class _Table:
    """One id-keyed map with its own counter."""

    def __init__(self) -> None:
        self.rows: Dict[int, object] = {}
        self.ids = itertools.count(1)


def _newest_first(items: List[T]) -> List[T]:
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    return sorted(items, key=lambda item: (item.created_at or epoch, item.id), reverse=True)


class MemoryStorage(Storage):
    """
    Dictionary-backed storage with per-entity auto-increment ids.

    Nothing survives a restart.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users = _Table()
        self._documents = _Table()
        self._jobs = _Table()
        self._printers = _Table()
        self._payments = _Table()
        self._contact_forms = _Table()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield

    # -- Generic helpers -----------------------------------------------------

    def _add(self, table: _Table, entity: T) -> T:
        with self._lock:
            entity = deepcopy(entity)
            entity.id = next(table.ids)
            if getattr(entity, "created_at", None) is None:
                entity.created_at = datetime.now(timezone.utc)
            if hasattr(entity, "updated_at") and entity.updated_at is None:
                entity.updated_at = entity.created_at
            table.rows[entity.id] = entity
            return deepcopy(entity)

    def _save(self, table: _Table, entity: T) -> T:
        with self._lock:
            if entity.id not in table.rows:
                raise KeyError(entity.id)
            table.rows[entity.id] = deepcopy(entity)
            return deepcopy(entity)

    def _get(self, table: _Table, entity_id: int):
        with self._lock:
            entity = table.rows.get(entity_id)
            return deepcopy(entity) if entity is not None else None

    def _all(self, table: _Table) -> list:
        with self._lock:
            return [deepcopy(entity) for entity in table.rows.values()]

    def _delete(self, table: _Table, entity_id: int) -> bool:
        with self._lock:
            return table.rows.pop(entity_id, None) is not None

    def _find(self, table: _Table, **criteria):
        with self._lock:
            for entity in table.rows.values():
                if all(getattr(entity, key) == value for key, value in criteria.items()):
                    return deepcopy(entity)
            return None

    # -- Users ---------------------------------------------------------------

    def add_user(self, user: User) -> User:
        return self._add(self._users, user)

    def save_user(self, user: User) -> User:
        return self._save(self._users, user)

    def get_user(self, user_id: int) -> Optional[User]:
        return self._get(self._users, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._find(self._users, username=username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._find(self._users, email=email)

    def get_user_by_external_uid(self, external_uid: str) -> Optional[User]:
        return self._find(self._users, external_uid=external_uid)

    def list_users(self) -> List[User]:
        return self._all(self._users)

    # -- Documents -----------------------------------------------------------

    def add_document(self, document: Document) -> Document:
        return self._add(self._documents, document)

    def save_document(self, document: Document) -> Document:
        return self._save(self._documents, document)

    def get_document(self, document_id: int) -> Optional[Document]:
        return self._get(self._documents, document_id)

    def list_documents(self, user_id: Optional[int] = None) -> List[Document]:
        documents = self._all(self._documents)
        if user_id is not None:
            documents = [d for d in documents if d.user_id == user_id]
        return _newest_first(documents)

    def delete_document(self, document_id: int) -> bool:
        return self._delete(self._documents, document_id)

    # -- Print jobs ----------------------------------------------------------

    def add_job(self, job: PrintJob) -> PrintJob:
        return self._add(self._jobs, job)

    def save_job(self, job: PrintJob) -> PrintJob:
        return self._save(self._jobs, job)

    def get_job(self, job_id: int) -> Optional[PrintJob]:
        return self._get(self._jobs, job_id)

    def list_jobs(self, user_id: Optional[int] = None, printer_id: Optional[int] = None) -> List[PrintJob]:
        jobs = self._all(self._jobs)
        if user_id is not None:
            jobs = [j for j in jobs if j.user_id == user_id]
        if printer_id is not None:
            jobs = [j for j in jobs if j.printer_id == printer_id]
        return _newest_first(jobs)

    def delete_job(self, job_id: int) -> bool:
        return self._delete(self._jobs, job_id)

    # -- Printers ------------------------------------------------------------

    def add_printer(self, printer: Printer) -> Printer:
        return self._add(self._printers, printer)

    def save_printer(self, printer: Printer) -> Printer:
        return self._save(self._printers, printer)

    def get_printer(self, printer_id: int) -> Optional[Printer]:
        return self._get(self._printers, printer_id)

    def list_printers(self) -> List[Printer]:
        return self._all(self._printers)

    # -- Payments ------------------------------------------------------------

    def add_payment(self, payment: Payment) -> Payment:
        return self._add(self._payments, payment)

    def save_payment(self, payment: Payment) -> Payment:
        return self._save(self._payments, payment)

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        return self._get(self._payments, payment_id)

    def get_payment_by_gateway_id(self, gateway_id: str) -> Optional[Payment]:
        return self._find(self._payments, gateway_id=gateway_id)

    def list_payments(self, user_id: Optional[int] = None) -> List[Payment]:
        payments = self._all(self._payments)
        if user_id is not None:
            payments = [p for p in payments if p.user_id == user_id]
        return _newest_first(payments)

    # -- Contact forms -------------------------------------------------------

    def add_contact_form(self, form: ContactForm) -> ContactForm:
        return self._add(self._contact_forms, form)

    def list_contact_forms(self) -> List[ContactForm]:
        return self._all(self._contact_forms)
