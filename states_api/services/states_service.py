"""States Service — read-modify-merge operations behind the /states routes.

Invariants:
    - Reference records arrive already loaded (one load per request, injected by the route)
    - get_state returns the raw reference record; stored facts are NOT merged here,
      while random_fact merges both sources (asymmetry kept on purpose)
    - Mutations are delegated to the FactStore; this layer only validates bodies
    - Every failure is a StatesAPIError subclass, translated to HTTP by the global handler

Design Decisions:
    - Plain async functions over a service class: no state to hold between calls
    - Append does not check the code against reference data: any well-formed code
      gets an entry, matching the store's upsert contract
    - Mutations reject malformed codes with 400 before touching the store
"""

import random

from states_api.core.domain_types import (
    ScalarField, StateCode, normalize_state_code, parse_state_code,
)
from states_api.core.errors import BadRequestError, ErrorContext, StateNotFoundError
from states_api.core.funfacts import combine_facts, merge_all, pick_random_fact
from states_api.core.reference_data import filter_contiguous, find_state
from states_api.core.repository_protocols import FactStore
from states_api.core.state_record import FactStoreEntry, MergedStateView, StateRecord
from states_api.schemas.states import FunFactDelete, FunFactsCreate, FunFactUpdate


def resolve_state(records: list[StateRecord], raw_code: str) -> StateRecord:
    """Find a record by code (case-insensitive) or raise StateNotFoundError."""
    code = normalize_state_code(raw_code)
    record = find_state(records, code)
    if record is None:
        raise StateNotFoundError(code)
    return record


async def list_states(
    records: list[StateRecord], store: FactStore, contig: bool | None = None,
) -> list[MergedStateView]:
    selected = filter_contiguous(records, contig)
    entries = await store.get_all()
    return merge_all(selected, entries)


def get_state(records: list[StateRecord], raw_code: str) -> StateRecord:
    return resolve_state(records, raw_code)


def get_scalar(
    records: list[StateRecord], raw_code: str, field: ScalarField,
) -> dict:
    """{"state": <name>, <field>: <value>} for one scalar attribute."""
    record = resolve_state(records, raw_code)
    return {"state": record.name, field.value: getattr(record, field.attr)}


async def random_fact(
    records: list[StateRecord],
    store: FactStore,
    raw_code: str,
    rng: random.Random | None = None,
) -> str:
    record = resolve_state(records, raw_code)
    code = StateCode(record.code.upper())
    entry = await store.get(code)
    facts = combine_facts(record.funfacts, entry)
    return pick_random_fact(facts, code, rng)


async def append_facts(
    store: FactStore, raw_code: str, body: FunFactsCreate,
) -> FactStoreEntry:
    code = parse_state_code(raw_code)
    return await store.append_facts(code, body.funfacts)


async def overwrite_fact(
    store: FactStore, raw_code: str, body: FunFactUpdate | None,
) -> FactStoreEntry:
    code = parse_state_code(raw_code)
    if body is None or body.index is None or body.funfact is None:
        raise BadRequestError(
            "Index and funfact are required", ErrorContext(state_code=code),
        )
    return await store.overwrite_at(code, body.index, body.funfact)


async def delete_fact(
    store: FactStore, raw_code: str, body: FunFactDelete | None,
) -> FactStoreEntry:
    code = parse_state_code(raw_code)
    if body is None or body.index is None:
        raise BadRequestError("Index is required", ErrorContext(state_code=code))
    return await store.remove_at(code, body.index)
