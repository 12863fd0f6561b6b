"""
Payment data model.

A Payment is created when the checkout flow starts and is updated when the
payment gateway reports back. Payments are never deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional


class PaymentStatus(Enum):
    """
    Status of a payment.

    Lifecycle:
        PENDING -> (COMPLETED | CANCELLED)
    """

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class Payment:
    """A monetary transaction tied to a user and optionally a print job."""

    user_id: int
    amount: float
    currency: str = "INR"
    print_job_id: Optional[int] = None
    gateway_id: Optional[str] = None
    """Payment id assigned by the external gateway."""

    status: PaymentStatus = PaymentStatus.PENDING

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "printJobId": self.print_job_id,
            "amount": self.amount,
            "currency": self.currency,
            "gatewayId": self.gateway_id,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
