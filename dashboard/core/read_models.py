"""Read Models — rows returned by repositories and the display rows built from them.

Invariants:
    - Raw rows (Stored*, InvoiceJoinedRow, CustomerTotalsRow) carry money in cents
    - Display rows carry money already formatted by core/formatting.py
    - InvoiceForm carries amount in major units (edit-form pre-fill)
"""

from dataclasses import dataclass
from datetime import date

from dashboard.core.domain_types import CustomerId, InvoiceId, InvoiceStatus, UserId


# ─── Raw rows (repository output) ────────────────────────────────

@dataclass(frozen=True)
class StoredInvoice:
    id: InvoiceId
    customer_id: CustomerId
    amount: int
    status: InvoiceStatus
    date: date


@dataclass(frozen=True)
class InvoiceJoinedRow:
    """Invoice joined with its customer."""
    id: InvoiceId
    amount: int
    date: date
    status: InvoiceStatus
    name: str
    email: str
    image_url: str


@dataclass(frozen=True)
class CustomerTotalsRow:
    id: CustomerId
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: int
    total_paid: int


@dataclass(frozen=True)
class StoredUser:
    id: UserId
    name: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class RevenueMonth:
    month: str
    revenue: int


# ─── Display rows (query service output) ─────────────────────────

@dataclass(frozen=True)
class InvoiceTableRow:
    id: InvoiceId
    name: str
    email: str
    image_url: str
    amount: str
    date: str
    status: InvoiceStatus


@dataclass(frozen=True)
class LatestInvoice:
    id: InvoiceId
    name: str
    email: str
    image_url: str
    amount: str


@dataclass(frozen=True)
class InvoiceForm:
    id: InvoiceId
    customer_id: CustomerId
    amount: float
    status: InvoiceStatus


@dataclass(frozen=True)
class CustomerField:
    id: CustomerId
    name: str


@dataclass(frozen=True)
class CustomerTableRow:
    id: CustomerId
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


@dataclass(frozen=True)
class CardData:
    """Dashboard summary cards, aggregated over the full tables."""
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str


@dataclass(frozen=True)
class RevenueChart:
    months: list[RevenueMonth]
    y_axis_labels: list[str]
    top_label: int
