"""Overview Routes — dashboard summary cards, latest invoices and the revenue chart."""

from fastapi import APIRouter, Depends

from dashboard.api.dependencies import get_query_service
from dashboard.config import get_settings
from dashboard.schemas.dashboard import CardDataResponse
from dashboard.services.invoice_queries import InvoiceQueryService

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/cards", response_model=CardDataResponse)
async def card_data(queries: InvoiceQueryService = Depends(get_query_service)):
    return CardDataResponse.model_validate(await queries.summary())


@router.get("/latest-invoices")
async def latest_invoices(
    queries: InvoiceQueryService = Depends(get_query_service),
):
    return await queries.latest(get_settings().latest_invoices_count)


@router.get("/revenue")
async def revenue_chart(queries: InvoiceQueryService = Depends(get_query_service)):
    return await queries.fetch_revenue()
