"""
Print job lifecycle tracker.

Records submitted jobs and moves them through their states:

    pending -> printing/processing -> ready -> completed
    any non-terminal state -> error

Status only ever moves forward (printing and processing are the same
stage and may replace each other). completed and error are terminal.
Re-applying the current status is a no-op.

Cancelling a job deletes it. Only jobs that have not left the printer
queue (pending, printing, processing) can be cancelled. Finished, failed
and cancelled jobs give their token back.

There are no timers here: status changes arrive through update_status(),
either from the API or from the JobEventWorker.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Union

from core.exceptions import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from models.print_job import JobStatus, PrintJob
from models.print_settings import TokenType, parse_choice
from modules.estimator import PriceQuoter
from services.storage import Storage
from services.token_service import TokenService
from logging_config import get_logger, get_job_logger


logger = get_logger(__name__)


class PrintJobTracker:
    """Creates print jobs and applies their status changes."""

    def __init__(self, storage: Storage, quoter: PriceQuoter, tokens: TokenService):
        self._storage = storage
        self._quoter = quoter
        self._tokens = tokens

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create(self, job: PrintJob) -> PrintJob:
        """
        Record a new job in the pending state.

        The cost is always computed here from the document's estimated
        pages, the settings and the token tier; any client-supplied cost is
        ignored.

        Raises:
            ValidationError: Bad copies, or the document belongs to another user
            NotFoundError: Unknown document or printer
            ConflictError: Printer is closed, or no token is free
        """
        if job.settings.copies < 1:
            raise ValidationError("Copies must be at least 1", field="copies")

        document = self._storage.get_document(job.document_id)
        if document is None:
            raise NotFoundError("Document", job.document_id)
        if document.user_id != job.user_id:
            raise ValidationError("Document does not belong to this user", field="documentId")

        if job.printer_id is not None:
            printer = self._storage.get_printer(job.printer_id)
            if printer is None:
                raise NotFoundError("Printer", job.printer_id)
            if not printer.is_open:
                raise ConflictError(f"{printer.name} is currently closed")

        billable_pages = document.estimated_pages * job.settings.copies
        quote = self._quoter.quote(document.estimated_pages, job.settings, job.token_type)

        job.cost = quote["total"]
        job.status = JobStatus.PENDING
        job.id = None
        job.created_at = None
        job.completed_at = None
        job.error_message = None

        with self._storage.transaction():
            self._tokens.check(job.token_type, billable_pages)
            stored = self._storage.add_job(job)
            self._tokens.reserve(stored.id, stored.token_type)

        get_job_logger(stored.id).info(
            f"Created for user {stored.user_id}: document {stored.document_id}, "
            f"{billable_pages} page(s), {stored.token_type.value} token, cost {stored.cost}"
        )
        return stored

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, job_id: int) -> PrintJob:
        job = self._storage.get_job(job_id)
        if job is None:
            raise NotFoundError("Print job", job_id)
        return job

    def list_by_user(self, user_id: int) -> List[PrintJob]:
        """Jobs of a user, newest first."""
        return self._storage.list_jobs(user_id=user_id)

    def queue(self, printer_id: int) -> List[PrintJob]:
        """Active jobs at a printer in service order: priority tokens first, then oldest first."""
        jobs = [j for j in self._storage.list_jobs(printer_id=printer_id) if j.status.is_active]
        return sorted(jobs, key=lambda j: (j.token_type is not TokenType.PRIORITY, j.created_at, j.id))

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def update_status(
        self,
        job_id: int,
        status: Union[JobStatus, str],
        error_message: Optional[str] = None,
    ) -> PrintJob:
        """
        Move a job to a new status.

        Raises:
            ValidationError: Unknown status value
            NotFoundError: Unknown job id
            InvalidTransitionError: Backwards move or move out of a terminal state
        """
        new_status = parse_choice(JobStatus, status, "status")

        with self._storage.transaction():
            job = self.get(job_id)
            old_status = job.status
            if new_status is old_status:
                return job
            self._check_transition(job, new_status)

            job.mark(new_status, error_message)
            job = self._storage.save_job(job)

            if new_status is JobStatus.COMPLETED:
                self._touch_document(job)
            if new_status.is_terminal:
                self._tokens.release(job.id)

        get_job_logger(job_id).info(f"{old_status.value} -> {new_status.value}")
        return job

    def delete(self, job_id: int) -> PrintJob:
        """
        Cancel a job by removing it.

        Returns:
            The job as it was before removal

        Raises:
            NotFoundError: Unknown job id
            ConflictError: Job has already left the queue
        """
        with self._storage.transaction():
            job = self.get(job_id)
            if not job.status.is_active:
                raise ConflictError(
                    f"Print job in status '{job.status.value}' can no longer be cancelled",
                    {"job_id": job_id, "status": job.status.value},
                )
            self._storage.delete_job(job_id)
            self._tokens.release(job_id)

        get_job_logger(job_id).info("Cancelled and removed")
        return job

    def record_payment(self, job_id: int, payment_id: str, payment_status: str) -> Optional[PrintJob]:
        """Mirror a payment's state onto its job. Returns None if the job is gone."""
        with self._storage.transaction():
            job = self._storage.get_job(job_id)
            if job is None:
                logger.warning(f"Payment {payment_id} refers to missing print job {job_id}")
                return None
            job.payment_id = payment_id
            job.payment_status = payment_status
            return self._storage.save_job(job)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_transition(job: PrintJob, new_status: JobStatus) -> None:
        current = job.status
        if current.is_terminal:
            raise InvalidTransitionError(job.id, current.value, new_status.value)
        if new_status is JobStatus.ERROR:
            return
        if new_status.rank < current.rank:
            raise InvalidTransitionError(job.id, current.value, new_status.value)

    def _touch_document(self, job: PrintJob) -> None:
        document = self._storage.get_document(job.document_id)
        if document is not None:
            document.last_printed = job.completed_at or datetime.now(timezone.utc)
            self._storage.save_document(document)
