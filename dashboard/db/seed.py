"""Seed Data — placeholder users, customers, invoices and revenue for a fresh database.

Invariants:
    - User passwords are stored as bcrypt hashes, never plain text
    - Invoice amounts in the placeholder data are already in cents
    - seed_database commits once; call it on an empty, migrated schema

Usage:
    alembic upgrade head && python -m dashboard.db.seed
"""

import asyncio
import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.infrastructure.passwords import hash_password
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.models.revenue import Revenue
from dashboard.models.user import User

logger = logging.getLogger(__name__)

USERS = [
    {
        "id": "410544b2-4001-4271-9855-fec4b6a6442a",
        "name": "User",
        "email": "user@nextmail.com",
        "password": "123456",
    },
]

CUSTOMERS = [
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "3958dc9e-737f-4377-85e9-fec4b6a6442a",
        "name": "Hector Simpson",
        "email": "hector@simpson.com",
        "image_url": "/customers/hector-simpson.png",
    },
]

INVOICES = [
    {"customer_id": CUSTOMERS[0]["id"], "amount": 15795, "status": "pending", "date": "2022-12-06"},
    {"customer_id": CUSTOMERS[1]["id"], "amount": 20348, "status": "pending", "date": "2022-11-14"},
    {"customer_id": CUSTOMERS[2]["id"], "amount": 3040, "status": "paid", "date": "2022-10-29"},
    {"customer_id": CUSTOMERS[0]["id"], "amount": 44800, "status": "paid", "date": "2023-09-10"},
    {"customer_id": CUSTOMERS[1]["id"], "amount": 34577, "status": "pending", "date": "2023-08-05"},
]

REVENUE = [
    {"month": "Jan", "revenue": 2000},
    {"month": "Feb", "revenue": 1800},
    {"month": "Mar", "revenue": 2200},
    {"month": "Apr", "revenue": 2500},
    {"month": "May", "revenue": 2300},
    {"month": "Jun", "revenue": 3200},
    {"month": "Jul", "revenue": 3500},
    {"month": "Aug", "revenue": 3700},
    {"month": "Sep", "revenue": 2500},
    {"month": "Oct", "revenue": 2800},
    {"month": "Nov", "revenue": 3000},
    {"month": "Dec", "revenue": 4800},
]


async def seed_database(
    db: AsyncSession,
    users: list[dict] = USERS,
    customers: list[dict] = CUSTOMERS,
    invoices: list[dict] = INVOICES,
    revenue: list[dict] = REVENUE,
) -> None:
    """Insert placeholder rows. Customers go in before the invoices that reference them."""
    for user in users:
        db.add(User(**{**user, "password": hash_password(user["password"])}))
    for customer in customers:
        db.add(Customer(**customer))
    await db.flush()
    for invoice in invoices:
        db.add(Invoice(
            customer_id=invoice["customer_id"],
            amount=invoice["amount"],
            status=invoice["status"],
            date=date.fromisoformat(invoice["date"]),
        ))
    for month in revenue:
        db.add(Revenue(**month))
    await db.commit()
    logger.info(
        f"Seeded {len(users)} users, {len(customers)} customers, "
        f"{len(invoices)} invoices, {len(revenue)} revenue months",
    )


async def _main() -> None:
    from dashboard.config import get_settings
    from dashboard.infrastructure.database import DatabaseSessionManager
    from dashboard.infrastructure.observability import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = DatabaseSessionManager(settings.database_url)
    try:
        async with manager.session() as db:
            await seed_database(db)
    finally:
        await manager.dispose()


if __name__ == "__main__":
    asyncio.run(_main())
