"""Invoice Mutations — validate → persist → invalidate → redirect for invoice forms.

Invariants:
    - Invalid input never reaches the repository (zero persistence calls)
    - Storage failures come back as generic "Database Error: ..." FormStates;
      the raw fault is logged, never returned
    - Ordering on success: persist happens-before invalidate happens-before Redirect
    - delete_invoice always invalidates the listing view and always returns a
      FormState (never a Redirect), on success and on failure
    - Nothing in here raises past the pipeline boundary for storage or input faults

Design Decisions:
    - Repository returns StoreResult values; the pipeline matches on them instead
      of wrapping storage calls in try/except
    - Cache invalidation failure is logged and ignored: a stale listing
      refreshes on its next read-through
    - Clock injected so tests pin the stamped date
"""

import logging
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

from dashboard.core.domain_types import INVOICES_VIEW, InvoiceAction, InvoiceId
from dashboard.core.formatting import to_minor_units
from dashboard.core.outcomes import (
    FailureKind, FormState, InvoiceDraft, InvoiceRecord,
    MutationOutcome, Redirect, StoreFailure,
)
from dashboard.core.repository_protocols import InvoiceRepository, ViewCache
from dashboard.schemas.invoice import parse_invoice_form

logger = logging.getLogger(__name__)


def database_error_message(action: InvoiceAction) -> str:
    return f"Database Error: Failed to {action.value} Invoice."


class InvoiceMutationPipeline:
    """Create/update/delete entry points for invoice form submissions."""

    def __init__(
        self,
        invoices: InvoiceRepository,
        cache: ViewCache,
        today: Callable[[], date] = date.today,
    ):
        self.invoices = invoices
        self.cache = cache
        self.today = today

    async def create_invoice(
        self, prev_state: FormState | None, form_data: Mapping[str, Any],
    ) -> MutationOutcome:
        """Validate and insert a new invoice dated today."""
        validation = parse_invoice_form(form_data, InvoiceAction.CREATE)
        if not validation.ok:
            return _validation_state(validation.errors, validation.message)

        result = await self.invoices.create(self._to_record(validation.value))
        if isinstance(result, StoreFailure):
            return _persistence_state(result, InvoiceAction.CREATE)

        logger.info(
            "Invoice created",
            extra={"invoice_id": result.value, "customer_id": validation.value.customer_id},
        )
        self._invalidate_listing()
        return Redirect(INVOICES_VIEW)

    async def update_invoice(
        self,
        invoice_id: InvoiceId,
        prev_state: FormState | None,
        form_data: Mapping[str, Any],
    ) -> MutationOutcome:
        """Validate and reassign customer, amount, status and date of an invoice."""
        validation = parse_invoice_form(form_data, InvoiceAction.UPDATE)
        if not validation.ok:
            return _validation_state(validation.errors, validation.message)

        result = await self.invoices.update(
            invoice_id, self._to_record(validation.value),
        )
        if isinstance(result, StoreFailure):
            return _persistence_state(result, InvoiceAction.UPDATE, invoice_id)

        logger.info("Invoice updated", extra={"invoice_id": invoice_id})
        self._invalidate_listing()
        return Redirect(INVOICES_VIEW)

    async def delete_invoice(self, invoice_id: InvoiceId) -> FormState:
        """Delete by id. The listing re-renders in place, so no redirect."""
        result = await self.invoices.delete(invoice_id)
        self._invalidate_listing()
        if isinstance(result, StoreFailure):
            return _persistence_state(result, InvoiceAction.DELETE, invoice_id)

        logger.info("Invoice deleted", extra={"invoice_id": invoice_id})
        return FormState(message="Deleted Invoice.")

    def _to_record(self, draft: InvoiceDraft) -> InvoiceRecord:
        return InvoiceRecord(
            customer_id=draft.customer_id,
            amount=to_minor_units(draft.amount),
            status=draft.status,
            date=self.today(),
        )

    def _invalidate_listing(self) -> None:
        try:
            self.cache.invalidate(INVOICES_VIEW)
        except Exception as e:
            logger.warning(
                f"View cache invalidation failed: {e}",
                extra={"view_key": INVOICES_VIEW},
            )


def _validation_state(errors: dict[str, list[str]], message: str | None) -> FormState:
    return FormState(errors=errors, message=message, failure=FailureKind.VALIDATION)


def _persistence_state(
    failure: StoreFailure, action: InvoiceAction, invoice_id: str | None = None,
) -> FormState:
    logger.error(
        f"Failed to {action.value.lower()} invoice: {failure.detail}",
        extra={"invoice_id": invoice_id, "failure_kind": failure.kind.value},
    )
    return FormState(message=database_error_message(action), failure=failure.kind)
