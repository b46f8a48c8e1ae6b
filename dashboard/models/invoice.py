"""Invoice ORM — one billable amount owed by a customer.

Invariants:
    - id is an opaque string (uuid4 text by default)
    - customer_id is a required FK to customers.id
    - amount is stored in minor units (cents), never negative
    - status is 'pending' or 'paid'
    - date defaults to the insert day

Design Decisions:
    - CHECK constraints mirror the form rules so bad rows fail at the store too
    - Index on date: listings and latest() order by it
"""

import uuid
import datetime

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dashboard.db.base import Base


def new_invoice_id() -> str:
    return str(uuid.uuid4())


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_invoices_amount_non_negative"),
        CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status",
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_invoice_id,
    )
    customer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("customers.id"), nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[datetime.date] = mapped_column(
        Date, nullable=False, default=datetime.date.today, index=True,
    )

    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="invoices",
    )
