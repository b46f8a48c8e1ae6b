"""Database Schema — declarative Base and seed data.

Invariants:
    - Every ORM model registers on dashboard.db.base.Base.metadata
    - Engines and sessions live in dashboard.infrastructure.database
"""
