"""
Print job data model.

A PrintJob is a request to print one Document with a given set of
settings. Its status is the only thing that changes after creation; see
services/job_tracker.py for the allowed transitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, Optional

from models.print_settings import PrintSettings, TokenType


class JobStatus(Enum):
    """
    Status of a print job.

    Lifecycle:
        PENDING -> (PRINTING | PROCESSING) -> READY -> COMPLETED
        any non-terminal state -> ERROR
    """

    PENDING = "pending"
    """Submitted, waiting at the printer."""

    PRINTING = "printing"
    """Printer is producing the pages."""

    PROCESSING = "processing"
    """Shop is handling the job (binding, cutting, ...). Same stage as printing."""

    READY = "ready"
    """Printed and waiting for pickup."""

    COMPLETED = "completed"
    """Picked up / finished."""

    ERROR = "error"
    """Job failed."""

    @property
    def rank(self) -> int:
        """Position in the forward order (ERROR has no position)."""
        return _STATUS_RANK.get(self, -1)

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.ERROR)

    @property
    def is_active(self) -> bool:
        """Still holds a place in a printer queue."""
        return self in (JobStatus.PENDING, JobStatus.PRINTING, JobStatus.PROCESSING)


_STATUS_RANK = {
    JobStatus.PENDING: 0,
    JobStatus.PRINTING: 1,
    JobStatus.PROCESSING: 1,
    JobStatus.READY: 2,
    JobStatus.COMPLETED: 3,
}


@dataclass
class PrintJob:
    """A request to print a Document."""

    user_id: int
    document_id: int
    settings: PrintSettings = field(default_factory=PrintSettings)
    printer_id: Optional[int] = None
    token_type: TokenType = TokenType.NORMAL
    status: JobStatus = JobStatus.PENDING
    cost: Optional[float] = None
    payment_id: Optional[str] = None
    payment_status: Optional[str] = None
    error_message: Optional[str] = None

    id: Optional[int] = None
    """Assigned by storage on create."""

    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "documentId": self.document_id,
            "printerId": self.printer_id,
            "status": self.status.value,
            "tokenType": self.token_type.value,
            "cost": self.cost,
            "paymentId": self.payment_id,
            "paymentStatus": self.payment_status,
            "errorMessage": self.error_message,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }
        data.update(self.settings.to_dict())
        return data

    def mark(self, status: JobStatus, error_message: Optional[str] = None) -> None:
        """Apply a status change (transition rules are checked by the tracker)."""
        self.status = status
        if status.is_terminal:
            self.completed_at = datetime.now(timezone.utc)
        if status is JobStatus.ERROR:
            self.error_message = error_message
