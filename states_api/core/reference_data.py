"""Reference Data Source — loads the static per-state dataset and answers lookups.

Invariants:
    - load_reference_data reads the file on every call (no process-wide cache)
    - Any read, decode or validation failure surfaces as DataUnavailableError
    - find_state is case-insensitive and returns None for unknown codes
    - filter_contiguous(records, None) returns every record, in dataset order

Design Decisions:
    - Bundled dataset resolved through importlib.resources so the package works
      from a wheel as well as a checkout
    - TypeAdapter validates the whole array at once: a single bad record fails the load
"""

import json
import logging
from importlib import resources
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from states_api.core.domain_types import NON_CONTIGUOUS_STATES
from states_api.core.errors import DataUnavailableError
from states_api.core.state_record import StateRecord

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[StateRecord])


def _read_dataset(path: str | Path | None) -> str:
    if path is None:
        return (
            resources.files("states_api.data")
            .joinpath("states.json")
            .read_text(encoding="utf-8")
        )
    return Path(path).read_text(encoding="utf-8")


def load_reference_data(path: str | Path | None = None) -> list[StateRecord]:
    """Load and validate every StateRecord. None means the bundled dataset."""
    try:
        raw = _read_dataset(path)
        return _records_adapter.validate_python(json.loads(raw))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to load states dataset from {path or 'package'}: {e}")
        raise DataUnavailableError(str(e)) from e


def find_state(records: list[StateRecord], code: str) -> StateRecord | None:
    wanted = code.strip().upper()
    return next((r for r in records if r.code.upper() == wanted), None)


def filter_contiguous(
    records: list[StateRecord], contig: bool | None,
) -> list[StateRecord]:
    """True keeps the lower 48, False keeps only AK/HI, None keeps everything."""
    if contig is None:
        return list(records)
    return [
        r for r in records
        if (r.code.upper() not in NON_CONTIGUOUS_STATES) == contig
    ]
