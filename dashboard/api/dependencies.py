"""Service Dependencies — build request-scoped services from the DB session.

Invariants:
    - Every service gets repositories bound to the request's AsyncSession
    - One view cache per process (lru_cache), sized and aged from Settings;
      get_view_cache is the override seam for tests
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.config import get_settings
from dashboard.infrastructure.database import get_db
from dashboard.infrastructure.repositories import (
    SqlCustomerRepository, SqlInvoiceRepository,
    SqlRevenueRepository, SqlUserRepository,
)
from dashboard.infrastructure.view_cache import RenderedViewCache
from dashboard.services.auth_gate import AuthGate
from dashboard.services.invoice_mutations import InvoiceMutationPipeline
from dashboard.services.invoice_queries import InvoiceQueryService


@lru_cache
def get_view_cache() -> RenderedViewCache:
    settings = get_settings()
    return RenderedViewCache(
        ttl_seconds=settings.view_cache_ttl_seconds,
        max_entries=settings.view_cache_max_entries,
    )


def get_mutation_pipeline(
    db: AsyncSession = Depends(get_db),
    cache: RenderedViewCache = Depends(get_view_cache),
) -> InvoiceMutationPipeline:
    return InvoiceMutationPipeline(SqlInvoiceRepository(db), cache)


def get_query_service(
    db: AsyncSession = Depends(get_db),
) -> InvoiceQueryService:
    return InvoiceQueryService(
        SqlInvoiceRepository(db),
        SqlCustomerRepository(db),
        SqlRevenueRepository(db),
        page_size=get_settings().invoices_page_size,
    )


def get_auth_gate(db: AsyncSession = Depends(get_db)) -> AuthGate:
    return AuthGate(SqlUserRepository(db))
