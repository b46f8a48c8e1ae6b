"""Invoice Queries — filtered/paginated listing, summary cards and chart data.

Invariants:
    - Listing returns at most page_size rows, offset (page - 1) * page_size
    - count_pages uses the same search predicate as list_filtered
    - summary() aggregates the full tables, never the current page
    - All money leaves this module formatted (or in major units for edit forms)
    - page outside 1..MAX_PAGE raises InvalidPageError

Design Decisions:
    - Search predicate and ordering live in the repository (SQL); this module
      owns page arithmetic and display formatting
    - Storage faults on reads surface as DatabaseError via the global handler
"""

from dashboard.core.domain_types import InvoiceId, InvoiceStatus
from dashboard.core.errors import InvalidPageError
from dashboard.core.formatting import format_currency, format_date_to_local, from_minor_units
from dashboard.core.pagination import (
    ITEMS_PER_PAGE, MAX_PAGE, generate_y_axis, page_offset, total_pages,
)
from dashboard.core.read_models import (
    CardData, CustomerField, CustomerTableRow, InvoiceForm,
    InvoiceTableRow, LatestInvoice, RevenueChart,
)
from dashboard.core.repository_protocols import (
    CustomerRepository, InvoiceRepository, RevenueRepository,
)

MONTH_ORDER = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class InvoiceQueryService:
    """Read-side entry points used by the dashboard pages."""

    def __init__(
        self,
        invoices: InvoiceRepository,
        customers: CustomerRepository,
        revenue: RevenueRepository,
        page_size: int = ITEMS_PER_PAGE,
    ):
        self.invoices = invoices
        self.customers = customers
        self.revenue = revenue
        self.page_size = page_size

    async def list_filtered(self, query: str, page: int) -> list[InvoiceTableRow]:
        """One page of invoices matching query, newest first."""
        if not 1 <= page <= MAX_PAGE:
            raise InvalidPageError(page)
        rows = await self.invoices.search(
            query, limit=self.page_size,
            offset=page_offset(page, self.page_size),
        )
        return [
            InvoiceTableRow(
                id=row.id,
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                amount=format_currency(row.amount),
                date=format_date_to_local(row.date),
                status=row.status,
            )
            for row in rows
        ]

    async def count_pages(self, query: str) -> int:
        matching = await self.invoices.count_matching(query)
        return total_pages(matching, self.page_size)

    async def summary(self) -> CardData:
        invoice_count = await self.invoices.count()
        customer_count = await self.customers.count()
        totals = await self.invoices.totals_by_status()
        return CardData(
            number_of_customers=customer_count,
            number_of_invoices=invoice_count,
            total_paid_invoices=format_currency(totals.get(InvoiceStatus.PAID, 0)),
            total_pending_invoices=format_currency(totals.get(InvoiceStatus.PENDING, 0)),
        )

    async def latest(self, n: int = 5) -> list[LatestInvoice]:
        rows = await self.invoices.latest(n)
        return [
            LatestInvoice(
                id=row.id,
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                amount=format_currency(row.amount),
            )
            for row in rows
        ]

    async def fetch_invoice_by_id(self, invoice_id: InvoiceId) -> InvoiceForm | None:
        """Edit-form record, amount converted back to major units."""
        stored = await self.invoices.get(invoice_id)
        if stored is None:
            return None
        return InvoiceForm(
            id=stored.id,
            customer_id=stored.customer_id,
            amount=from_minor_units(stored.amount),
            status=stored.status,
        )

    async def fetch_customers(self) -> list[CustomerField]:
        return await self.customers.list_fields()

    async def fetch_filtered_customers(self, query: str) -> list[CustomerTableRow]:
        rows = await self.customers.search_with_totals(query)
        return [
            CustomerTableRow(
                id=row.id,
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                total_invoices=row.total_invoices,
                total_pending=format_currency(row.total_pending),
                total_paid=format_currency(row.total_paid),
            )
            for row in rows
        ]

    async def fetch_revenue(self) -> RevenueChart:
        """Monthly revenue in calendar order with y-axis labels."""
        months = await self.revenue.list_all()
        months.sort(
            key=lambda m: MONTH_ORDER.index(m.month)
            if m.month in MONTH_ORDER else len(MONTH_ORDER),
        )
        labels, top_label = generate_y_axis([m.revenue for m in months])
        return RevenueChart(months=months, y_axis_labels=labels, top_label=top_label)
