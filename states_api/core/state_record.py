"""State Record — immutable value types for reference data and stored fun facts.

Invariants:
    - StateRecord is frozen; funfacts is a tuple so no caller can mutate it in place
    - StateRecord.name travels on the wire as "state" (dataset key and response key)
    - FactStoreEntry.funfacts preserves insertion order
    - MergedStateView.funfacts = record facts followed by stored facts

Design Decisions:
    - pydantic models for reference data: the dataset is validated on load, so a
      malformed file fails loudly instead of leaking KeyErrors into handlers
    - FactStoreEntry is a plain frozen dataclass: the store hands out snapshots,
      never live ORM rows
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class StateRecord(BaseModel):
    """One state from the static dataset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    code: str = Field(min_length=2, max_length=2)
    name: str = Field(alias="state")
    slug: str | None = None
    capital_city: str
    nickname: str
    population: int
    admission_date: str
    admission_number: int | None = None
    funfacts: tuple[str, ...] = ()

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class MergedStateView(StateRecord):
    """StateRecord whose funfacts include the stored facts. Computed per request."""


@dataclass(frozen=True)
class FactStoreEntry:
    """Snapshot of one fact-store row."""
    state_code: str
    funfacts: tuple[str, ...] = ()

    def to_response(self) -> dict:
        return {"stateCode": self.state_code, "funfacts": list(self.funfacts)}
