"""Customer Routes — customer picker options and the customers table (read-only)."""

from fastapi import APIRouter, Depends, Query

from dashboard.api.dependencies import get_query_service
from dashboard.services.invoice_queries import InvoiceQueryService

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.get("")
async def list_customers(queries: InvoiceQueryService = Depends(get_query_service)):
    """id/name pairs for the invoice form's customer select, by name."""
    return await queries.fetch_customers()


@router.get("/table")
async def customers_table(
    query: str = Query("", max_length=200),
    queries: InvoiceQueryService = Depends(get_query_service),
):
    return await queries.fetch_filtered_customers(query)
