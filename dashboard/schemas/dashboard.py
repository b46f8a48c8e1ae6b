"""Dashboard Schemas — response shapes for cards and mutation feedback.

Design Decisions:
    - Card keys are camelCase on the wire (numberOfCustomers, ...), matching
      what the dashboard front end reads
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CardDataResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str


class FormStateResponse(BaseModel):
    errors: dict[str, list[str]] = {}
    message: str | None = None
