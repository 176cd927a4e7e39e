"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Codes passed to a FactStore are already normalized (uppercase)
    - Every mutating method has durably committed when it returns

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any fake store
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from states_api.core.domain_types import StateCode
from states_api.core.state_record import FactStoreEntry


class FactStore(Protocol):
    """Contract for user-contributed fun fact persistence, implemented by shell."""

    async def get(self, code: StateCode) -> FactStoreEntry | None: ...

    async def get_all(self) -> dict[str, FactStoreEntry]: ...

    async def append_facts(
        self, code: StateCode, facts: list[str],
    ) -> FactStoreEntry: ...

    async def overwrite_at(
        self, code: StateCode, position: int, fact: str,
    ) -> FactStoreEntry: ...

    async def remove_at(self, code: StateCode, position: int) -> FactStoreEntry: ...
