"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL in production, aiosqlite in tests
"""
