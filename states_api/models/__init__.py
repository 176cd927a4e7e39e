"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata is complete for create_all and Alembic
"""

from states_api.models.state_funfacts import StateFunFacts  # noqa: F401
