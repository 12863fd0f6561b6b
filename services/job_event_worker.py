"""
Background worker applying print job status events.

Printers (driver callbacks) and shop operators report progress by posting
events. The API only enqueues them; this worker applies them in arrival
order through PrintJobTracker.update_status(). Job status therefore only
changes when something actually happened at the printer.

Thread Model:
    Main Thread (Flask)
    └── JobEvents thread (consumes the event queue until stop())

Usage:
    # At app startup
    worker = JobEventWorker(tracker)
    worker.start()

    # In routes
    worker.submit(JobEvent(job_id=7, status=JobStatus.PRINTING, source="printer"))

    # In tests (no thread)
    worker.submit(event)
    worker.drain()

    # At app shutdown
    worker.stop()
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from core.exceptions import PrintMeError
from models.print_job import JobStatus
from services.job_tracker import PrintJobTracker
from logging_config import get_logger, set_thread_name


logger = get_logger(__name__)


@dataclass(frozen=True)
class JobEvent:
    """A reported status change for one print job."""

    job_id: int
    status: JobStatus
    source: str = "printer"
    """Who reported it: 'printer' or 'operator'."""

    error_message: Optional[str] = None
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.job_id,
            "status": self.status.value,
            "source": self.source,
            "errorMessage": self.error_message,
            "receivedAt": self.received_at.isoformat(),
        }


class JobEventWorker:
    """
    Consumes JobEvents from a queue and applies them.

    Events the lifecycle rejects (unknown job, backwards move) are logged
    and counted in rejected_count; the worker keeps running.
    """

    def __init__(self, tracker: PrintJobTracker, poll_interval_seconds: float = 0.5):
        self._tracker = tracker
        self._poll_interval = poll_interval_seconds
        self._queue: "queue.Queue[JobEvent]" = queue.Queue()

        # Thread control
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._is_running = False

        self.applied_count = 0
        self.rejected_count = 0

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def pending_count(self) -> int:
        return self._queue.qsize()

    def submit(self, event: JobEvent) -> None:
        self._queue.put(event)
        logger.debug(f"Queued {event.source} event for job {event.job_id}: {event.status.value}")

    def drain(self) -> int:
        """
        Apply every queued event on the calling thread.

        Returns:
            Number of events applied successfully
        """
        applied = 0
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                return applied
            if self._apply(event):
                applied += 1

    def start(self) -> None:
        """Start the consumer thread. Safe to call multiple times."""
        if self._is_running:
            logger.warning("JobEventWorker already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="JobEvents",
            daemon=True,
        )
        self._is_running = True
        self._thread.start()
        logger.info("Job event worker started")

    def stop(self) -> None:
        """Stop the consumer thread, leaving unprocessed events queued."""
        if not self._is_running:
            return

        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
            if self._thread.is_alive():
                logger.warning("Job event worker did not stop cleanly")

        self._is_running = False
        self._thread = None
        logger.info("Job event worker stopped")

    def _run_loop(self) -> None:
        set_thread_name("JobEvents")
        while not self._stop_event.is_set():
            try:
                event = self._queue.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
            self._apply(event)

    def _apply(self, event: JobEvent) -> bool:
        try:
            self._tracker.update_status(event.job_id, event.status, event.error_message)
        except PrintMeError as e:
            self.rejected_count += 1
            logger.warning(f"Rejected {event.source} event for job {event.job_id}: {e.message}")
            return False
        except Exception as e:
            self.rejected_count += 1
            logger.error(f"Failed to apply event for job {event.job_id}: {e}", exc_info=True)
            return False
        self.applied_count += 1
        return True
