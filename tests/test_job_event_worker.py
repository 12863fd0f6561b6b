"""
Unit tests for the job event worker.

Most cases drain the queue synchronously; one starts the real thread.
"""

import time

import pytest

from models.print_job import JobStatus
from services.job_event_worker import JobEvent, JobEventWorker


# Fixtures

@pytest.fixture
def worker(tracker):
    worker = JobEventWorker(tracker, poll_interval_seconds=0.05)
    yield worker
    worker.stop()


class TestDrain:

    def test_applies_events_in_order(self, worker, tracker, make_job):
        job = tracker.create(make_job())
        worker.submit(JobEvent(job_id=job.id, status=JobStatus.PRINTING))
        worker.submit(JobEvent(job_id=job.id, status=JobStatus.READY, source="operator"))

        assert worker.pending_count == 2
        assert worker.drain() == 2
        assert worker.pending_count == 0
        assert tracker.get(job.id).status is JobStatus.READY

    def test_rejected_events_are_counted_not_raised(self, worker, tracker, make_job):
        job = tracker.create(make_job())
        worker.submit(JobEvent(job_id=job.id, status=JobStatus.COMPLETED))
        worker.submit(JobEvent(job_id=job.id, status=JobStatus.PRINTING))
        worker.submit(JobEvent(job_id=999, status=JobStatus.READY))

        assert worker.drain() == 1
        assert worker.applied_count == 1
        assert worker.rejected_count == 2
        assert tracker.get(job.id).status is JobStatus.COMPLETED

    def test_error_event_keeps_message(self, worker, tracker, make_job):
        job = tracker.create(make_job())
        worker.submit(JobEvent(job_id=job.id, status=JobStatus.ERROR, error_message="Out of toner"))
        worker.drain()
        assert tracker.get(job.id).error_message == "Out of toner"

    def test_drain_empty_queue(self, worker):
        assert worker.drain() == 0


class TestThread:

    def test_start_stop(self, worker):
        worker.start()
        assert worker.is_running
        worker.start()  # second start is ignored
        worker.stop()
        assert not worker.is_running

    def test_background_thread_applies_events(self, worker, tracker, make_job):
        job = tracker.create(make_job())
        worker.start()
        worker.submit(JobEvent(job_id=job.id, status=JobStatus.PRINTING))

        deadline = time.monotonic() + 5.0
        while worker.applied_count < 1 and time.monotonic() < deadline:
            time.sleep(0.01)

        assert tracker.get(job.id).status is JobStatus.PRINTING


class TestJobEvent:

    def test_to_dict(self):
        data = JobEvent(job_id=3, status=JobStatus.READY, source="operator").to_dict()
        assert data["jobId"] == 3
        assert data["status"] == "ready"
        assert data["source"] == "operator"
        assert data["receivedAt"]
