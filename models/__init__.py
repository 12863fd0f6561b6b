"""
Data models for PrintMe Web.

This module contains dataclasses for:
- User: registered account
- Document: uploaded file with its estimated page count
- PrintJob / JobStatus: a print request and its lifecycle state
- PrintSettings and its choice enums (ColorMode, Quality, Sides, ...)
- Printer / PrinterLocation: print shops and nearby-search results
- Payment / PaymentStatus: checkout transactions
- ContactForm, DashboardStats, AdminMetrics: support and reporting

Every model serializes with to_dict() using the camelCase keys the web
client expects.
"""

from .print_settings import (
    ColorMode,
    Quality,
    Sides,
    PaperSize,
    Orientation,
    TokenType,
    PrintSettings,
    parse_choice,
)
from .print_job import PrintJob, JobStatus
from .document import Document
from .user import User
from .printer import Printer, PrinterLocation
from .payment import Payment, PaymentStatus
from .support import ContactForm, DashboardStats, AdminMetrics

__all__ = [
    # Settings
    "ColorMode",
    "Quality",
    "Sides",
    "PaperSize",
    "Orientation",
    "TokenType",
    "PrintSettings",
    "parse_choice",
    # Jobs
    "PrintJob",
    "JobStatus",
    # Documents and users
    "Document",
    "User",
    # Printers
    "Printer",
    "PrinterLocation",
    # Payments
    "Payment",
    "PaymentStatus",
    # Support / reporting
    "ContactForm",
    "DashboardStats",
    "AdminMetrics",
]
