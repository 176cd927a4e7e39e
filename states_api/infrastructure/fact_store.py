"""SQL Fact Store — FactStore implementation over the state_funfacts table.

Invariants:
    - Every mutation runs read-modify-write in ONE transaction and commits before returning
    - Append first ensures the row exists with INSERT ... ON CONFLICT DO NOTHING, so two
      first appends for one code never race on the primary key
    - The target row is then read WITH FOR UPDATE so overlapping writers on a code serialize
      (SQLite has no row locks; its database write lock, taken by the insert, serializes instead)
    - Positions are validated by core.funfacts.to_offset before any list access
    - Any SQLAlchemyError rolls the session back and surfaces as StoreError

Design Decisions:
    - Returns FactStoreEntry snapshots, not ORM rows: callers cannot mutate persisted state
    - Lists are rebuilt, never mutated in place: the JSON column only tracks reassignment
    - Append is deliberately not idempotent: the same facts posted twice are stored twice
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from states_api.core.domain_types import StateCode
from states_api.core.errors import (
    FactEntryNotFoundError, InvalidIndexError, StoreError,
)
from states_api.core.funfacts import to_offset
from states_api.core.state_record import FactStoreEntry
from states_api.models.state_funfacts import StateFunFacts

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def _snapshot(row: StateFunFacts) -> FactStoreEntry:
    return FactStoreEntry(state_code=row.state_code, funfacts=tuple(row.funfacts or ()))


class SqlFactStore:
    """Fun fact persistence backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _guard(self, operation: str, code: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Fact store {operation} failed: {e}",
                extra={"state_code": code},
            )
            raise StoreError(str(e), operation) from e

    async def _ensure_row(self, code: StateCode) -> None:
        """Insert an empty entry for code unless one already exists."""
        dialect = self._db.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise StoreError(f"Unsupported database dialect: {dialect}", "append")
        await self._db.execute(
            insert(StateFunFacts)
            .values(state_code=code, funfacts=[])
            .on_conflict_do_nothing(index_elements=["state_code"]),
        )

    async def _locked_row(self, code: StateCode) -> StateFunFacts | None:
        result = await self._db.execute(
            select(StateFunFacts)
            .where(StateFunFacts.state_code == code)
            .with_for_update()
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def _offset_or_rollback(self, position: int, length: int, code: str) -> int:
        """Validate position; on failure release the row lock before propagating."""
        try:
            return to_offset(position, length, code)
        except InvalidIndexError:
            await self._db.rollback()
            raise

    async def get(self, code: StateCode) -> FactStoreEntry | None:
        async with self._guard("get", code):
            result = await self._db.execute(
                select(StateFunFacts).where(StateFunFacts.state_code == code),
            )
            row = result.scalar_one_or_none()
        return _snapshot(row) if row else None

    async def get_all(self) -> dict[str, FactStoreEntry]:
        async with self._guard("get_all", "*"):
            result = await self._db.execute(select(StateFunFacts))
            rows = result.scalars().all()
        return {row.state_code: _snapshot(row) for row in rows}

    async def append_facts(
        self, code: StateCode, facts: list[str],
    ) -> FactStoreEntry:
        """Append facts in order, creating the row if absent (upsert)."""
        async with self._guard("append", code):
            await self._ensure_row(code)
            row = await self._locked_row(code)
            row.funfacts = [*row.funfacts, *facts]
            entry = _snapshot(row)
            await self._db.commit()
        logger.info(
            "Appended fun facts",
            extra={"state_code": code, "fact_count": len(facts)},
        )
        return entry

    async def overwrite_at(
        self, code: StateCode, position: int, fact: str,
    ) -> FactStoreEntry:
        async with self._guard("overwrite", code):
            row = await self._locked_row(code)
            if row is None:
                await self._db.rollback()
                raise FactEntryNotFoundError(code)
            facts = list(row.funfacts)
            offset = await self._offset_or_rollback(position, len(facts), code)
            facts[offset] = fact
            row.funfacts = facts
            entry = _snapshot(row)
            await self._db.commit()
        logger.info(
            "Overwrote fun fact",
            extra={"state_code": code, "position": position},
        )
        return entry

    async def remove_at(self, code: StateCode, position: int) -> FactStoreEntry:
        """Remove one fact; later facts shift left, no gap remains."""
        async with self._guard("remove", code):
            row = await self._locked_row(code)
            if row is None:
                await self._db.rollback()
                raise FactEntryNotFoundError(code)
            facts = list(row.funfacts)
            offset = await self._offset_or_rollback(position, len(facts), code)
            del facts[offset]
            row.funfacts = facts
            entry = _snapshot(row)
            await self._db.commit()
        logger.info(
            "Removed fun fact",
            extra={"state_code": code, "position": position},
        )
        return entry
