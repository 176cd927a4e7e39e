"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies)

Design Decisions:
    - Separate from core value types: schemas are API contracts, core types are domain data
"""
