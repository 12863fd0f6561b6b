"""
Services layer for PrintMe Web.

This module contains the business logic services:
- Storage / MemoryStorage: persistence interface and in-memory store
- PrinterDirectory: printers and nearby search
- TokenService: normal/priority token pools
- PrintJobTracker: job creation and status lifecycle
- JobEventWorker: background thread applying printer/operator events
- UserService, DocumentService, PaymentService: account, upload and checkout records
- MetricsService, SupportService: dashboards and contact forms

Thread Model:
    Main Thread (Flask, threaded request handling)
    └── JobEventWorker thread (consumes the status event queue)

All services share one Storage instance; its lock serializes mutations.
"""

from .storage import Storage, MemoryStorage
from .printer_directory import PrinterDirectory
from .token_service import TokenService
from .job_tracker import PrintJobTracker
from .job_event_worker import JobEvent, JobEventWorker
from .user_service import UserService
from .document_service import DocumentService
from .payment_service import PaymentService
from .metrics_service import MetricsService
from .support_service import SupportService

__all__ = [
    "Storage",
    "MemoryStorage",
    "PrinterDirectory",
    "TokenService",
    "PrintJobTracker",
    "JobEvent",
    "JobEventWorker",
    "UserService",
    "DocumentService",
    "PaymentService",
    "MetricsService",
    "SupportService",
]
