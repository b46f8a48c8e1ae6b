"""Invoice Form Schema — declarative field rules and the total form parser.

Invariants:
    - parse_invoice_form never raises: failures come back as ValidationResult data
    - Every failing field is reported, keyed by its form name, in form order
    - One fixed user-facing message per field, whatever pydantic's reason was
    - Empty customerId counts as missing
    - An accepted amount stores as 1..MAX_MINOR_UNITS cents

Design Decisions:
    - Pydantic model does type coercion and bounds; this module only maps
      pydantic's error list onto the form's field names and messages
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dashboard.core.domain_types import CustomerId, InvoiceAction, InvoiceStatus
from dashboard.core.formatting import MAX_AMOUNT, to_minor_units
from dashboard.core.outcomes import InvoiceDraft, ValidationResult

FIELD_MESSAGES: dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


class InvoiceFormSchema(BaseModel):
    """Create/update form fields. Amount is in major units (dollars)."""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: float = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    status: InvoiceStatus

    @field_validator("amount")
    @classmethod
    def at_least_one_cent(cls, v: float) -> float:
        if to_minor_units(v) < 1:
            raise ValueError("amount rounds to zero cents")
        return v


def missing_fields_message(action: InvoiceAction) -> str:
    return f"Missing Fields. Failed to {action.value} Invoice."


def parse_invoice_form(
    form_data: Mapping[str, Any], action: InvoiceAction,
) -> ValidationResult:
    """Validate raw form values into an InvoiceDraft or a field-keyed error map."""
    raw = {name: form_data.get(name) for name in FIELD_MESSAGES}
    try:
        parsed = InvoiceFormSchema.model_validate(raw)
    except ValidationError as exc:
        failed = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        errors = {
            name: [message]
            for name, message in FIELD_MESSAGES.items()
            if name in failed
        }
        return ValidationResult.failure(errors, missing_fields_message(action))

    return ValidationResult.success(InvoiceDraft(
        customer_id=CustomerId(parsed.customer_id),
        amount=parsed.amount,
        status=parsed.status,
    ))
