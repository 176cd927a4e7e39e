"""States Routes — reference lookups and fun fact CRUD under /states.

Invariants:
    - Routes never contain business logic (delegate to services.states_service)
    - Domain errors propagate to the global StatesAPIError handler, never caught here
    - Mutation endpoints return the stored entry as {"stateCode", "funfacts"}

Design Decisions:
    - Collection served at both /states and /states/: clients use either form
    - PATCH/DELETE bodies optional at the framework level so a missing body is
      reported with the same 400 message as a missing field
"""

from fastapi import APIRouter, Body, Depends, Query

from states_api.api.dependencies import get_fact_store, get_reference_data
from states_api.core.domain_types import ScalarField
from states_api.core.repository_protocols import FactStore
from states_api.core.state_record import StateRecord
from states_api.schemas.states import FunFactDelete, FunFactsCreate, FunFactUpdate
from states_api.services import states_service

router = APIRouter(prefix="/states", tags=["states"])


@router.get("")
@router.get("/", include_in_schema=False)
async def list_states(
    contig: bool | None = Query(None),
    records: list[StateRecord] = Depends(get_reference_data),
    store: FactStore = Depends(get_fact_store),
):
    """All states merged with stored fun facts, optionally filtered by contiguity."""
    merged = await states_service.list_states(records, store, contig)
    return {"states": [view.to_response() for view in merged]}


@router.get("/{state}")
async def get_state(
    state: str, records: list[StateRecord] = Depends(get_reference_data),
):
    return states_service.get_state(records, state).to_response()


@router.get("/{state}/funfact")
async def get_random_funfact(
    state: str,
    records: list[StateRecord] = Depends(get_reference_data),
    store: FactStore = Depends(get_fact_store),
):
    fact = await states_service.random_fact(records, store, state)
    return {"funfact": fact}


@router.get("/{state}/capital")
async def get_capital(
    state: str, records: list[StateRecord] = Depends(get_reference_data),
):
    return states_service.get_scalar(records, state, ScalarField.CAPITAL)


@router.get("/{state}/nickname")
async def get_nickname(
    state: str, records: list[StateRecord] = Depends(get_reference_data),
):
    return states_service.get_scalar(records, state, ScalarField.NICKNAME)


@router.get("/{state}/population")
async def get_population(
    state: str, records: list[StateRecord] = Depends(get_reference_data),
):
    return states_service.get_scalar(records, state, ScalarField.POPULATION)


@router.get("/{state}/admission")
async def get_admission(
    state: str, records: list[StateRecord] = Depends(get_reference_data),
):
    return states_service.get_scalar(records, state, ScalarField.ADMITTED)


@router.post("/{state}/funfact")
async def post_funfacts(
    state: str,
    body: FunFactsCreate,
    store: FactStore = Depends(get_fact_store),
):
    """Append fun facts, creating the state's entry on first use."""
    entry = await states_service.append_facts(store, state, body)
    return entry.to_response()


@router.patch("/{state}/funfact")
async def patch_funfact(
    state: str,
    body: FunFactUpdate | None = Body(None),
    store: FactStore = Depends(get_fact_store),
):
    """Replace the fact at 1-based `index`."""
    entry = await states_service.overwrite_fact(store, state, body)
    return entry.to_response()


@router.delete("/{state}/funfact")
async def delete_funfact(
    state: str,
    body: FunFactDelete | None = Body(None),
    store: FactStore = Depends(get_fact_store),
):
    """Remove the fact at 1-based `index`; later facts move up one position."""
    entry = await states_service.delete_fact(store, state, body)
    return entry.to_response()
