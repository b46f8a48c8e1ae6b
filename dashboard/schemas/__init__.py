"""Pydantic Schemas — request/response validation at the API boundary.

Invariants:
    - Schemas validate at system boundary (form input, credentials, responses)
    - Domain enums from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
