"""Domain Types — state code identity and the contiguity partition.

Invariants:
    - normalize_state_code only uppercases; parse_state_code also rejects anything but
      two ASCII letters, so writes never reach the two-character column with a bad key
    - NON_CONTIGUOUS_STATES holds exactly the two states outside the lower 48

Design Decisions:
    - NewType over a wrapper class: zero runtime cost, full type-checker support
"""

import re
from enum import Enum
from typing import NewType

from states_api.core.errors import BadRequestError, ErrorContext


StateCode = NewType("StateCode", str)

_CODE_PATTERN = re.compile(r"[A-Z]{2}")

NON_CONTIGUOUS_STATES: frozenset[str] = frozenset({"AK", "HI"})


class ScalarField(str, Enum):
    """Single-field lookups. Value is the response key, attr the StateRecord field."""
    CAPITAL = "capital"
    NICKNAME = "nickname"
    POPULATION = "population"
    ADMITTED = "admitted"

    @property
    def attr(self) -> str:
        return _SCALAR_ATTRS[self]


_SCALAR_ATTRS = {
    ScalarField.CAPITAL: "capital_city",
    ScalarField.NICKNAME: "nickname",
    ScalarField.POPULATION: "population",
    ScalarField.ADMITTED: "admission_date",
}


def normalize_state_code(raw: str) -> StateCode:
    """Uppercase and strip a path parameter. Does not check the code exists."""
    return StateCode(raw.strip().upper())


def parse_state_code(raw: str) -> StateCode:
    """Normalize raw and require exactly two ASCII letters, else BadRequestError."""
    code = normalize_state_code(raw)
    if not _CODE_PATTERN.fullmatch(code):
        raise BadRequestError(
            "Invalid state abbreviation parameter", ErrorContext(state_code=code),
        )
    return code
