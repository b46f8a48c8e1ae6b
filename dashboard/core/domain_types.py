"""Domain Types — identifiers, enums and view keys shared across layers.

Invariants:
    - InvoiceId and CustomerId are opaque strings (never parsed)
    - Invoice status is exactly one of InvoiceStatus
    - Money crosses the persistence boundary in minor units only

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", str)
CustomerId = NewType("CustomerId", str)
UserId = NewType("UserId", str)


# ─── Value Types ─────────────────────────────────────────────────

MinorUnits = NewType("MinorUnits", int)   # cents


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class InvoiceAction(str, Enum):
    """Form-driven invoice mutations, used in summary messages."""
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


class SignInFailure(str, Enum):
    """The two ways a sign-in attempt can fail."""
    INVALID_CREDENTIALS = "invalid-credentials"
    UNEXPECTED = "unexpected"


# ─── Routes / view keys ──────────────────────────────────────────

INVOICES_VIEW = "/dashboard/invoices"
