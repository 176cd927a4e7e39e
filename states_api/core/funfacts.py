"""Fun Facts — pure merge, position and selection rules. No IO.

Invariants:
    - combine_facts keeps dataset facts first, stored facts second, nothing dropped
    - to_offset validates the 1-based position BEFORE converting to a 0-based offset
    - pick_random_fact never returns from an empty sequence (raises instead)

Design Decisions:
    - rng injectable: tests pass a seeded random.Random, production uses the module
    - Pure functions, not methods on the store: the same rules serve any FactStore
"""

import random
from collections.abc import Iterable, Mapping, Sequence

from states_api.core.errors import InvalidIndexError, NoFactsAvailableError, ErrorContext
from states_api.core.state_record import FactStoreEntry, MergedStateView, StateRecord


def combine_facts(
    record_facts: Iterable[str], entry: FactStoreEntry | None,
) -> list[str]:
    """Dataset facts followed by stored facts."""
    combined = list(record_facts)
    if entry is not None:
        combined.extend(entry.funfacts)
    return combined


def merge_state_view(
    record: StateRecord, entry: FactStoreEntry | None,
) -> MergedStateView:
    data = record.model_dump()
    data["funfacts"] = tuple(combine_facts(record.funfacts, entry))
    return MergedStateView.model_validate(data)


def merge_all(
    records: Iterable[StateRecord], entries: Mapping[str, FactStoreEntry],
) -> list[MergedStateView]:
    """Merge every record with its entry. Records without an entry keep only their own facts."""
    return [merge_state_view(r, entries.get(r.code.upper())) for r in records]


def to_offset(position: int, length: int, state_code: str | None = None) -> int:
    """Convert a caller-facing 1-based position into a list offset.

    Raises InvalidIndexError when position is outside [1, length].
    """
    if position < 1 or position > length:
        raise InvalidIndexError(
            position, length, ErrorContext(state_code=state_code),
        )
    return position - 1


def pick_random_fact(
    facts: Sequence[str], state_code: str, rng: random.Random | None = None,
) -> str:
    if not facts:
        raise NoFactsAvailableError(state_code)
    return (rng or random).choice(facts)
