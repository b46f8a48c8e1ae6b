"""Settings — environment aliases, async driver rewrite and listing bounds."""

import pytest
from pydantic import ValidationError

from dashboard.config import Settings


def test_postgres_url_alias_gets_async_driver(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("POSTGRES_URL", "postgres://u:p@db.example:5432/invoices")
    settings = Settings(_env_file=None)
    assert settings.database_url == "postgresql+asyncpg://u:p@db.example:5432/invoices"


def test_postgresql_scheme_rewritten(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost/dashboard")
    assert Settings(_env_file=None).database_url == "postgresql+asyncpg://u:p@localhost/dashboard"


def test_async_urls_left_alone(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///dash.db")
    assert Settings(_env_file=None).database_url == "sqlite+aiosqlite:///dash.db"


def test_listing_defaults(monkeypatch):
    monkeypatch.delenv("INVOICES_PAGE_SIZE", raising=False)
    settings = Settings(_env_file=None)
    assert settings.invoices_page_size == 6
    assert settings.latest_invoices_count == 5


def test_page_size_must_be_positive(monkeypatch):
    monkeypatch.setenv("INVOICES_PAGE_SIZE", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
