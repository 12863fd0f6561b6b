"""Dashboard statistics and admin metrics, computed on demand."""

from __future__ import annotations

from collections import Counter

from models.payment import PaymentStatus
from models.print_job import JobStatus
from models.support import AdminMetrics, DashboardStats
from services.storage import Storage


class MetricsService:
    def __init__(self, storage: Storage):
        self._storage = storage

    def _printed_pages(self, jobs) -> int:
        pages = 0
        for job in jobs:
            if job.status is not JobStatus.COMPLETED:
                continue
            document = self._storage.get_document(job.document_id)
            estimated = document.estimated_pages if document else 0
            pages += estimated * job.settings.copies
        return pages

    def dashboard(self, user_id: int) -> DashboardStats:
        jobs = self._storage.list_jobs(user_id=user_id)
        paid = sum(
            p.amount for p in self._storage.list_payments(user_id=user_id)
            if p.status is PaymentStatus.COMPLETED
        )
        return DashboardStats(
            print_jobs=len(jobs),
            pages_printed=self._printed_pages(jobs),
            balance=round(paid, 2),
        )

    def admin(self) -> AdminMetrics:
        jobs = self._storage.list_jobs()
        printers = self._storage.list_printers()
        revenue = sum(
            p.amount for p in self._storage.list_payments()
            if p.status is PaymentStatus.COMPLETED
        )
        by_status = Counter(job.status.value for job in jobs)
        return AdminMetrics(
            total_users=len(self._storage.list_users()),
            total_printers=len(printers),
            open_printers=sum(1 for p in printers if p.is_open),
            total_revenue=round(revenue, 2),
            pages_printed=self._printed_pages(jobs),
            jobs_by_status={status.value: by_status.get(status.value, 0) for status in JobStatus},
        )
