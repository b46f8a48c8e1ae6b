"""Invoice Routes — listing, edit-form fetch and the create/update/delete form handlers.

Invariants:
    - Mutation handlers never raise for bad input or storage faults: the pipeline
      returns a Redirect (→ 303) or a FormState (→ JSON {errors, message})
    - FormState status: validation 400, not found 404, persistence 503, success 200
    - Listing pages are read through the view cache, keyed by (query, page);
      pages past the last one are served but never cached
    - The cache generation is taken before the first read, so a render that
      overlaps a mutation is not stored

Design Decisions:
    - Form fields arrive as a JSON object of raw values; the pipeline does all
      coercion, so no request model is declared for them
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse

from dashboard.api.dependencies import (
    get_mutation_pipeline, get_query_service, get_view_cache,
)
from dashboard.core.domain_types import INVOICES_VIEW, InvoiceId
from dashboard.core.errors import ResourceNotFoundError
from dashboard.core.outcomes import FailureKind, FormState, MutationOutcome, Redirect
from dashboard.core.pagination import generate_pagination
from dashboard.infrastructure.view_cache import RenderedViewCache
from dashboard.schemas.dashboard import FormStateResponse
from dashboard.services.invoice_mutations import InvoiceMutationPipeline
from dashboard.services.invoice_queries import InvoiceQueryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])

_STATUS_BY_FAILURE = {
    None: status.HTTP_200_OK,
    FailureKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.PERSISTENCE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_FORM_STATE_RESPONSES = {
    code: {"model": FormStateResponse}
    for code in (400, 404, 503)
}


def _to_response(outcome: MutationOutcome):
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.route, status_code=status.HTTP_303_SEE_OTHER)
    return JSONResponse(
        status_code=_STATUS_BY_FAILURE[outcome.failure],
        content=outcome.to_dict(),
    )


@router.get("")
async def list_invoices(
    query: str = Query("", max_length=200),
    page: int = Query(1),
    queries: InvoiceQueryService = Depends(get_query_service),
    cache: RenderedViewCache = Depends(get_view_cache),
):
    """One page of invoices matching query, with page-navigation tokens."""
    generation = cache.generation(INVOICES_VIEW)
    cached = cache.get(INVOICES_VIEW, (query, page))
    if cached is not None:
        return cached

    rows = await queries.list_filtered(query, page)
    total_pages = await queries.count_pages(query)
    payload = jsonable_encoder({
        "invoices": rows,
        "pagination": {
            "page": page,
            "total_pages": total_pages,
            "pages": generate_pagination(page, total_pages),
        },
    })
    logger.debug(
        "Invoice listing rendered",
        extra={"view_key": INVOICES_VIEW, "path": f"?query={query}&page={page}"},
    )
    if page <= max(total_pages, 1):
        cache.put(INVOICES_VIEW, (query, page), payload, generation)
    return payload


@router.get("/{invoice_id}")
async def get_invoice(
    invoice_id: str,
    queries: InvoiceQueryService = Depends(get_query_service),
):
    """Invoice edit-form data, amount in dollars."""
    invoice = await queries.fetch_invoice_by_id(InvoiceId(invoice_id))
    if invoice is None:
        raise ResourceNotFoundError("Invoice", invoice_id)
    return invoice


@router.post("", responses=_FORM_STATE_RESPONSES)
async def create_invoice(
    form_data: dict[str, Any] = Body(...),
    pipeline: InvoiceMutationPipeline = Depends(get_mutation_pipeline),
):
    outcome = await pipeline.create_invoice(None, form_data)
    return _to_response(outcome)


@router.put("/{invoice_id}", responses=_FORM_STATE_RESPONSES)
async def update_invoice(
    invoice_id: str,
    form_data: dict[str, Any] = Body(...),
    pipeline: InvoiceMutationPipeline = Depends(get_mutation_pipeline),
):
    outcome = await pipeline.update_invoice(InvoiceId(invoice_id), None, form_data)
    return _to_response(outcome)


@router.delete("/{invoice_id}", responses=_FORM_STATE_RESPONSES)
async def delete_invoice(
    invoice_id: str,
    pipeline: InvoiceMutationPipeline = Depends(get_mutation_pipeline),
):
    state: FormState = await pipeline.delete_invoice(InvoiceId(invoice_id))
    return _to_response(state)
