"""SQL Repositories — SQLAlchemy implementations of the core storage Protocols.

Invariants:
    - Invoice mutations return StoreResult: StoreOk(id) or StoreFailure(kind, detail);
      any exception (SQLAlchemy or driver, e.g. OverflowError) is caught,
      rolled back and turned into a PERSISTENCE failure
    - Each mutation commits once; a failure leaves no partial row behind
    - Missing invoice id → NOT_FOUND; missing customer → PERSISTENCE
    - Read methods raise DatabaseError with a per-operation message
    - Search matches customer name, customer email or invoice status,
      case-insensitive, with % and _ taken literally

Design Decisions:
    - Explicit customer lookup inside the transaction enforces the FK even on
      backends that do not (SQLite without PRAGMA foreign_keys)
    - Listing order: date DESC, then id ASC, so equal dates page stably
"""

import functools
import logging

from sqlalchemy import case, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.domain_types import CustomerId, InvoiceId, InvoiceStatus, UserId
from dashboard.core.errors import DatabaseError
from dashboard.core.outcomes import (
    FailureKind, InvoiceRecord, StoreFailure, StoreOk, StoreResult,
)
from dashboard.core.read_models import (
    CustomerField, CustomerTotalsRow, InvoiceJoinedRow,
    RevenueMonth, StoredInvoice, StoredUser,
)
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice, new_invoice_id
from dashboard.models.revenue import Revenue
from dashboard.models.user import User

logger = logging.getLogger(__name__)


def _read_operation(failure_message: str):
    """Map SQLAlchemy errors raised by a read method to DatabaseError."""
    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            try:
                return await method(self, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(
                    f"Database Error: {e}", extra={"error_code": "DATABASE_ERROR"},
                )
                raise DatabaseError(failure_message, "query") from e
        return wrapper
    return decorator


def _invoice_search_predicate(query: str):
    return or_(
        Customer.name.icontains(query, autoescape=True),
        Customer.email.icontains(query, autoescape=True),
        Invoice.status.icontains(query, autoescape=True),
    )


def _joined_invoice_select():
    return (
        select(
            Invoice.id, Invoice.amount, Invoice.date, Invoice.status,
            Customer.name, Customer.email, Customer.image_url,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
    )


def _to_joined_row(row) -> InvoiceJoinedRow:
    return InvoiceJoinedRow(
        id=InvoiceId(row.id),
        amount=row.amount,
        date=row.date,
        status=InvoiceStatus(row.status),
        name=row.name,
        email=row.email,
        image_url=row.image_url,
    )


class SqlInvoiceRepository:
    """Invoice persistence backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Mutations ───────────────────────────────────────────────

    async def create(self, record: InvoiceRecord) -> StoreResult[InvoiceId]:
        invoice_id = InvoiceId(new_invoice_id())
        try:
            if not await self._customer_exists(record.customer_id):
                await self.db.rollback()
                return _missing_customer(record.customer_id)
            self.db.add(Invoice(
                id=invoice_id,
                customer_id=record.customer_id,
                amount=record.amount,
                status=record.status.value,
                date=record.date,
            ))
            await self.db.commit()
        except Exception as e:
            return await self._rolled_back(e)
        return StoreOk(invoice_id)

    async def update(
        self, invoice_id: InvoiceId, record: InvoiceRecord,
    ) -> StoreResult[InvoiceId]:
        try:
            invoice = await self.db.get(Invoice, invoice_id)
            if invoice is None:
                await self.db.rollback()
                return _missing_invoice(invoice_id)
            if not await self._customer_exists(record.customer_id):
                await self.db.rollback()
                return _missing_customer(record.customer_id)
            invoice.customer_id = record.customer_id
            invoice.amount = record.amount
            invoice.status = record.status.value
            invoice.date = record.date
            await self.db.commit()
        except Exception as e:
            return await self._rolled_back(e)
        return StoreOk(invoice_id)

    async def delete(self, invoice_id: InvoiceId) -> StoreResult[InvoiceId]:
        try:
            invoice = await self.db.get(Invoice, invoice_id)
            if invoice is None:
                await self.db.rollback()
                return _missing_invoice(invoice_id)
            await self.db.delete(invoice)
            await self.db.commit()
        except Exception as e:
            return await self._rolled_back(e)
        return StoreOk(invoice_id)

    # ─── Reads ───────────────────────────────────────────────────

    @_read_operation("Failed to fetch invoice.")
    async def get(self, invoice_id: InvoiceId) -> StoredInvoice | None:
        invoice = await self.db.get(Invoice, invoice_id)
        if invoice is None:
            return None
        return StoredInvoice(
            id=InvoiceId(invoice.id),
            customer_id=CustomerId(invoice.customer_id),
            amount=invoice.amount,
            status=InvoiceStatus(invoice.status),
            date=invoice.date,
        )

    @_read_operation("Failed to fetch invoices.")
    async def search(
        self, query: str, limit: int, offset: int,
    ) -> list[InvoiceJoinedRow]:
        result = await self.db.execute(
            _joined_invoice_select()
            .where(_invoice_search_predicate(query))
            .order_by(Invoice.date.desc(), Invoice.id.asc())
            .limit(limit)
            .offset(offset),
        )
        return [_to_joined_row(row) for row in result.all()]

    @_read_operation("Failed to fetch total number of invoices.")
    async def count_matching(self, query: str) -> int:
        result = await self.db.execute(
            select(func.count(Invoice.id))
            .select_from(Invoice)
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(_invoice_search_predicate(query)),
        )
        return result.scalar_one()

    @_read_operation("Failed to fetch card data.")
    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Invoice.id)))
        return result.scalar_one()

    @_read_operation("Failed to fetch card data.")
    async def totals_by_status(self) -> dict[InvoiceStatus, int]:
        result = await self.db.execute(
            select(Invoice.status, func.sum(Invoice.amount))
            .group_by(Invoice.status),
        )
        return {
            InvoiceStatus(status): int(total or 0)
            for status, total in result.all()
        }

    @_read_operation("Failed to fetch the latest invoices.")
    async def latest(self, limit: int) -> list[InvoiceJoinedRow]:
        result = await self.db.execute(
            _joined_invoice_select()
            .order_by(Invoice.date.desc(), Invoice.id.asc())
            .limit(limit),
        )
        return [_to_joined_row(row) for row in result.all()]

    # ─── Helpers ─────────────────────────────────────────────────

    async def _customer_exists(self, customer_id: CustomerId) -> bool:
        return await self.db.get(Customer, customer_id) is not None

    async def _rolled_back(self, error: Exception) -> StoreFailure:
        await self.db.rollback()
        logger.error(
            f"Invoice mutation rolled back: {type(error).__name__}: {error}",
            extra={"error_code": "DATABASE_ERROR"},
        )
        return StoreFailure(FailureKind.PERSISTENCE, str(error))


def _missing_invoice(invoice_id: InvoiceId) -> StoreFailure:
    return StoreFailure(FailureKind.NOT_FOUND, f"Invoice '{invoice_id}' not found")


def _missing_customer(customer_id: CustomerId) -> StoreFailure:
    return StoreFailure(
        FailureKind.PERSISTENCE, f"Customer '{customer_id}' does not exist",
    )


class SqlCustomerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @_read_operation("Failed to fetch card data.")
    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Customer.id)))
        return result.scalar_one()

    @_read_operation("Failed to fetch all customers.")
    async def list_fields(self) -> list[CustomerField]:
        result = await self.db.execute(
            select(Customer.id, Customer.name).order_by(Customer.name.asc()),
        )
        return [
            CustomerField(id=CustomerId(row.id), name=row.name)
            for row in result.all()
        ]

    @_read_operation("Failed to fetch customer table.")
    async def search_with_totals(self, query: str) -> list[CustomerTotalsRow]:
        total_pending = func.sum(case(
            (Invoice.status == InvoiceStatus.PENDING.value, Invoice.amount),
            else_=0,
        ))
        total_paid = func.sum(case(
            (Invoice.status == InvoiceStatus.PAID.value, Invoice.amount),
            else_=0,
        ))
        result = await self.db.execute(
            select(
                Customer.id, Customer.name, Customer.email, Customer.image_url,
                func.count(Invoice.id).label("total_invoices"),
                total_pending.label("total_pending"),
                total_paid.label("total_paid"),
            )
            .outerjoin(Invoice, Invoice.customer_id == Customer.id)
            .where(or_(
                Customer.name.icontains(query, autoescape=True),
                Customer.email.icontains(query, autoescape=True),
            ))
            .group_by(
                Customer.id, Customer.name, Customer.email, Customer.image_url,
            )
            .order_by(Customer.name.asc()),
        )
        return [
            CustomerTotalsRow(
                id=CustomerId(row.id),
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                total_invoices=row.total_invoices,
                total_pending=int(row.total_pending or 0),
                total_paid=int(row.total_paid or 0),
            )
            for row in result.all()
        ]


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> StoredUser | None:
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return StoredUser(
            id=UserId(user.id), name=user.name,
            email=user.email, password_hash=user.password,
        )


class SqlRevenueRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @_read_operation("Failed to fetch revenue data.")
    async def list_all(self) -> list[RevenueMonth]:
        result = await self.db.execute(select(Revenue))
        return [
            RevenueMonth(month=r.month, revenue=r.revenue)
            for r in result.scalars().all()
        ]
