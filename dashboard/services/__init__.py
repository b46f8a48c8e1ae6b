"""Services Layer — mutation pipeline, query service and auth gate.

Invariants:
    - Services receive their collaborators through the constructor
    - Services never import SQLAlchemy; storage goes through core Protocols
"""
