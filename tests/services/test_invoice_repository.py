"""SqlInvoiceRepository — transactional mutations returning StoreResult values.

Tests cover:
    - create persists exactly one row; unknown customer leaves nothing behind
    - update reassigns customer/amount/status/date; unknown id → NOT_FOUND
    - delete removes the row; a second delete → NOT_FOUND (no exception)
    - driver errors outside SQLAlchemy (integer overflow) roll back into PERSISTENCE
    - search treats % and _ literally
"""

from datetime import date

import pytest
from sqlalchemy import func, select

from dashboard.core.domain_types import CustomerId, InvoiceId, InvoiceStatus
from dashboard.core.outcomes import FailureKind, InvoiceRecord, StoreFailure, StoreOk
from dashboard.infrastructure.repositories import SqlInvoiceRepository
from dashboard.models.invoice import Invoice


def _record(customer_id="c1", amount=5000, status=InvoiceStatus.PENDING, on=date(2026, 10, 19)):
    return InvoiceRecord(
        customer_id=CustomerId(customer_id), amount=amount, status=status, date=on,
    )


async def _row_count(db) -> int:
    return (await db.execute(select(func.count(Invoice.id)))).scalar_one()


@pytest.fixture
async def repo(test_db, add_customer):
    await add_customer("c1", "Delba de Oliveira", "delba@oliveira.com")
    await add_customer("c2", "Lee Robinson", "lee@robinson.com")
    return SqlInvoiceRepository(test_db)


async def test_create_inserts_one_row(repo, test_db):
    result = await repo.create(_record())
    assert isinstance(result, StoreOk)
    stored = await repo.get(result.value)
    assert stored.amount == 5000
    assert stored.customer_id == "c1"
    assert stored.status is InvoiceStatus.PENDING
    assert stored.date == date(2026, 10, 19)
    assert await _row_count(test_db) == 1


async def test_create_for_unknown_customer_fails_without_partial_row(repo, test_db):
    result = await repo.create(_record(customer_id="ghost"))
    assert isinstance(result, StoreFailure)
    assert result.kind is FailureKind.PERSISTENCE
    assert await _row_count(test_db) == 0


async def test_update_reassigns_customer_amount_status_and_date(repo):
    created = await repo.create(_record())
    result = await repo.update(
        created.value,
        _record(customer_id="c2", amount=1250, status=InvoiceStatus.PAID, on=date(2026, 11, 1)),
    )
    assert result == StoreOk(created.value)
    stored = await repo.get(created.value)
    assert (stored.customer_id, stored.amount, stored.status, stored.date) == (
        "c2", 1250, InvoiceStatus.PAID, date(2026, 11, 1),
    )


async def test_update_unknown_invoice_is_not_found(repo):
    result = await repo.update(InvoiceId("missing"), _record())
    assert isinstance(result, StoreFailure)
    assert result.kind is FailureKind.NOT_FOUND


async def test_update_to_unknown_customer_keeps_original(repo):
    created = await repo.create(_record())
    result = await repo.update(created.value, _record(customer_id="ghost", amount=1))
    assert result.kind is FailureKind.PERSISTENCE
    stored = await repo.get(created.value)
    assert stored.customer_id == "c1"
    assert stored.amount == 5000


async def test_delete_twice_second_is_not_found(repo, test_db):
    created = await repo.create(_record())
    assert await repo.delete(created.value) == StoreOk(created.value)
    second = await repo.delete(created.value)
    assert isinstance(second, StoreFailure)
    assert second.kind is FailureKind.NOT_FOUND
    assert await repo.get(created.value) is None
    assert await _row_count(test_db) == 0


async def test_search_treats_wildcards_literally(repo):
    await repo.create(_record())
    assert await repo.count_matching("%") == 0
    assert await repo.count_matching("_") == 0
    assert await repo.count_matching("") == 1


async def test_create_with_driver_overflow_rolls_back_into_failure(repo, test_db):
    result = await repo.create(_record(amount=10**20))
    assert isinstance(result, StoreFailure)
    assert result.kind is FailureKind.PERSISTENCE
    assert await _row_count(test_db) == 0


async def test_update_with_driver_overflow_keeps_original(repo):
    created = await repo.create(_record())
    result = await repo.update(created.value, _record(amount=10**20))
    assert isinstance(result, StoreFailure)
    assert result.kind is FailureKind.PERSISTENCE
    stored = await repo.get(created.value)
    assert stored.amount == 5000
