"""Infrastructure Layer — database access, repositories, caches and logging.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - SQLAlchemy exceptions never leave this layer unmapped
"""
