"""Route Dependencies — per-request reference data and fact store.

Invariants:
    - Reference data is loaded fresh for every request that needs it
    - One SqlFactStore per request, bound to that request's AsyncSession

Design Decisions:
    - Dependencies instead of module globals: tests swap either one via
      app.dependency_overrides without patching imports
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from states_api.config import get_settings
from states_api.core.reference_data import load_reference_data
from states_api.core.repository_protocols import FactStore
from states_api.core.state_record import StateRecord
from states_api.infrastructure.database import get_db
from states_api.infrastructure.fact_store import SqlFactStore


def get_reference_data() -> list[StateRecord]:
    return load_reference_data(get_settings().states_data_path)


def get_fact_store(db: AsyncSession = Depends(get_db)) -> FactStore:
    return SqlFactStore(db)
