"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON, except the negotiated 404 for unmatched routes

Design Decisions:
    - Thin routes delegate to services
"""
