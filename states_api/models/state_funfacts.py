"""StateFunFacts ORM — one row of user-contributed fun facts per state code.

Invariants:
    - state_code is the primary key (uppercase two-letter code), so at most one row per state
    - funfacts is an ordered JSON array of strings, never NULL
    - Rows are created lazily by the first append and never deleted as a whole

Design Decisions:
    - JSON column over a child table: the list is always read and written whole,
      positional edits need no ordering column
    - Mutations assign a NEW list: SQLAlchemy's JSON type only tracks reassignment
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from states_api.db.base import Base


class StateFunFacts(Base):
    __tablename__ = "state_funfacts"

    state_code: Mapped[str] = mapped_column(String(2), primary_key=True)
    funfacts: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
