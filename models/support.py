"""
Support and reporting models.

ContactForm is a stored support request. DashboardStats and AdminMetrics
are computed views, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional


@dataclass
class ContactForm:
    name: str
    email: str
    subject: str
    message: str
    is_resolved: bool = False

    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "isResolved": self.is_resolved,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class DashboardStats:
    """Per-user summary shown on the user dashboard."""

    print_jobs: int
    pages_printed: int
    balance: float
    """Sum of completed payments."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "printJobs": self.print_jobs,
            "pagesPrinted": self.pages_printed,
            "balance": self.balance,
        }


@dataclass(frozen=True)
class AdminMetrics:
    """Shop-wide figures for the vendor/admin dashboard."""

    total_users: int
    total_printers: int
    open_printers: int
    total_revenue: float
    pages_printed: int
    jobs_by_status: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalUsers": self.total_users,
            "totalPrinters": self.total_printers,
            "openPrinters": self.open_printers,
            "totalRevenue": self.total_revenue,
            "pagesPrinted": self.pages_printed,
            "jobsByStatus": dict(self.jobs_by_status),
        }
