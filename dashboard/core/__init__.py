"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (clock is passed in, never read)

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate
      the IO around these helpers
"""
