"""Outcomes — explicit result values returned across the mutation pipeline.

Invariants:
    - ValidationResult holds either a value or errors+message, never both
    - StoreResult is StoreOk | StoreFailure; repositories never raise on the
      mutation path
    - FormState is what the presentation layer renders inline
    - Redirect is returned, never raised

Design Decisions:
    - Frozen dataclasses: outcomes are values, callers pattern-match on type
    - FormState.failure is internal classification; to_dict() exposes only
      errors and message
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Generic, TypeVar

from dashboard.core.domain_types import CustomerId, InvoiceStatus, MinorUnits

T = TypeVar("T")


class FailureKind(str, Enum):
    """Classification of a failed mutation."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


# ─── Validation ──────────────────────────────────────────────────

@dataclass(frozen=True)
class InvoiceDraft:
    """Validated invoice form fields, amount still in major units."""
    customer_id: CustomerId
    amount: float
    status: InvoiceStatus


@dataclass(frozen=True)
class ValidationResult:
    value: InvoiceDraft | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)
    message: str | None = None

    def __post_init__(self):
        if self.value is not None and (self.errors or self.message):
            raise ValueError("ValidationResult cannot carry both a value and errors")

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def success(cls, value: InvoiceDraft) -> "ValidationResult":
        return cls(value=value)

    @classmethod
    def failure(cls, errors: dict[str, list[str]], message: str) -> "ValidationResult":
        return cls(errors=errors, message=message)


# ─── Persistence ─────────────────────────────────────────────────

@dataclass(frozen=True)
class InvoiceRecord:
    """Invoice values handed to the store, amount in minor units."""
    customer_id: CustomerId
    amount: MinorUnits
    status: InvoiceStatus
    date: date


@dataclass(frozen=True)
class StoreOk(Generic[T]):
    value: T


@dataclass(frozen=True)
class StoreFailure:
    kind: FailureKind
    detail: str


StoreResult = StoreOk[T] | StoreFailure


# ─── Pipeline outcomes ───────────────────────────────────────────

@dataclass(frozen=True)
class FormState:
    """Form feedback: field errors and/or a summary message."""
    errors: dict[str, list[str]] = field(default_factory=dict)
    message: str | None = None
    failure: FailureKind | None = None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def to_dict(self) -> dict:
        return {"errors": self.errors, "message": self.message}


@dataclass(frozen=True)
class Redirect:
    """Tell the caller to navigate to route."""
    route: str


MutationOutcome = FormState | Redirect
