"""Root conftest — shared test configuration, async DB and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - get_view_cache overridden with a fresh cache per test
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import dashboard.models  # noqa: E402,F401
from dashboard.api.dependencies import get_view_cache  # noqa: E402
from dashboard.db.base import Base  # noqa: E402
from dashboard.infrastructure.database import get_db  # noqa: E402
from dashboard.infrastructure.view_cache import RenderedViewCache  # noqa: E402
from dashboard.main import app  # noqa: E402
from dashboard.models.customer import Customer  # noqa: E402
from dashboard.models.invoice import Invoice  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def view_cache():
    return RenderedViewCache()


@pytest.fixture
async def client(test_session_factory, view_cache):
    """FastAPI test client with DB and view cache dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_view_cache] = lambda: view_cache

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def add_customer(test_db):
    """Insert a customer and return it."""
    async def _add(id: str, name: str, email: str, image_url: str = "/c.png"):
        customer = Customer(id=id, name=name, email=email, image_url=image_url)
        test_db.add(customer)
        await test_db.commit()
        return customer
    return _add


@pytest.fixture
async def add_invoice(test_db):
    """Insert an invoice (amount in cents) and return it."""
    async def _add(
        customer_id: str, amount: int, status: str = "pending",
        on: date = date(2026, 1, 1), id: str | None = None,
    ):
        invoice = Invoice(
            customer_id=customer_id, amount=amount, status=status, date=on,
        )
        if id is not None:
            invoice.id = id
        test_db.add(invoice)
        await test_db.commit()
        return invoice
    return _add
