"""Boundary Protocols — contracts between core/services and the storage/cache shell.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy directly
    - InvoiceRepository mutations return StoreResult values; they never raise
    - Read methods may raise DatabaseError (core/errors.py)
    - A create/update referencing an unknown customer is a StoreFailure,
      never a silent insert

Design Decisions:
    - Protocol over ABC: structural subtyping, so tests pass plain fakes
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from dashboard.core.domain_types import InvoiceId, InvoiceStatus
from dashboard.core.outcomes import InvoiceRecord, StoreResult
from dashboard.core.read_models import (
    CustomerField, CustomerTotalsRow, InvoiceJoinedRow,
    RevenueMonth, StoredInvoice, StoredUser,
)


class InvoiceRepository(Protocol):
    """Contract for invoice persistence — implemented by infrastructure."""
    async def create(self, record: InvoiceRecord) -> StoreResult[InvoiceId]: ...
    async def update(
        self, invoice_id: InvoiceId, record: InvoiceRecord,
    ) -> StoreResult[InvoiceId]: ...
    async def delete(self, invoice_id: InvoiceId) -> StoreResult[InvoiceId]: ...
    async def get(self, invoice_id: InvoiceId) -> StoredInvoice | None: ...
    async def search(
        self, query: str, limit: int, offset: int,
    ) -> list[InvoiceJoinedRow]: ...
    async def count_matching(self, query: str) -> int: ...
    async def count(self) -> int: ...
    async def totals_by_status(self) -> dict[InvoiceStatus, int]: ...
    async def latest(self, limit: int) -> list[InvoiceJoinedRow]: ...


class CustomerRepository(Protocol):
    """Contract for read-only customer access."""
    async def count(self) -> int: ...
    async def list_fields(self) -> list[CustomerField]: ...
    async def search_with_totals(self, query: str) -> list[CustomerTotalsRow]: ...


class UserRepository(Protocol):
    async def get_by_email(self, email: str) -> StoredUser | None: ...


class RevenueRepository(Protocol):
    async def list_all(self) -> list[RevenueMonth]: ...


class ViewCache(Protocol):
    """Marks rendered views stale. Return value is never relied upon."""
    def invalidate(self, view_key: str) -> None: ...
