"""Reference Data — verifies dataset loading, lookup and the contiguity filter.

Invariants:
    - Bundled dataset has exactly 50 unique uppercase codes
    - Unreadable or malformed files raise DataUnavailableError
    - find_state is case-insensitive; unknown codes return None
    - contig=True drops exactly AK and HI, contig=False keeps exactly AK and HI
"""

from pathlib import Path

import pytest

from states_api.core.errors import DataUnavailableError
from states_api.core.reference_data import (
    filter_contiguous, find_state, load_reference_data,
)

SAMPLE = Path(__file__).parent.parent / "fixtures" / "states_sample.json"


def test_bundled_dataset_has_fifty_states():
    records = load_reference_data()
    codes = [r.code for r in records]
    assert len(codes) == 50
    assert len(set(codes)) == 50
    assert all(c == c.upper() and len(c) == 2 for c in codes)


def test_bundled_dataset_fields_are_populated():
    kansas = find_state(load_reference_data(), "KS")
    assert kansas is not None
    assert kansas.name == "Kansas"
    assert kansas.capital_city == "Topeka"
    assert kansas.nickname == "Sunflower State"
    assert kansas.admission_date == "1861-01-29"
    assert kansas.population > 0


def test_each_call_returns_fresh_records():
    first = load_reference_data(SAMPLE)
    second = load_reference_data(SAMPLE)
    assert first == second
    assert first is not second


def test_dataset_funfacts_default_to_empty():
    california = find_state(load_reference_data(SAMPLE), "CA")
    assert california.funfacts == ()


def test_dataset_funfacts_preserved_in_order():
    kansas = find_state(load_reference_data(SAMPLE), "KS")
    assert kansas.funfacts[0].startswith("Kansas is the geographic center")
    assert len(kansas.funfacts) == 2


def test_missing_file_raises_data_unavailable(tmp_path):
    with pytest.raises(DataUnavailableError) as exc_info:
        load_reference_data(tmp_path / "missing.json")
    assert exc_info.value.http_status == 500


def test_invalid_json_raises_data_unavailable(tmp_path):
    bad = tmp_path / "states.json"
    bad.write_text("[{not json", encoding="utf-8")
    with pytest.raises(DataUnavailableError):
        load_reference_data(bad)


def test_record_missing_fields_raises_data_unavailable(tmp_path):
    bad = tmp_path / "states.json"
    bad.write_text('[{"code": "KS", "state": "Kansas"}]', encoding="utf-8")
    with pytest.raises(DataUnavailableError):
        load_reference_data(bad)


def test_find_state_is_case_insensitive():
    records = load_reference_data(SAMPLE)
    assert find_state(records, "ks").code == "KS"
    assert find_state(records, "Ks").code == "KS"


def test_find_state_unknown_returns_none():
    assert find_state(load_reference_data(SAMPLE), "ZZ") is None


def test_contig_none_keeps_everything_in_order():
    records = load_reference_data()
    assert filter_contiguous(records, None) == records


def test_contig_true_excludes_alaska_and_hawaii():
    records = load_reference_data()
    codes = {r.code for r in filter_contiguous(records, True)}
    assert len(codes) == 48
    assert "AK" not in codes
    assert "HI" not in codes


def test_contig_false_keeps_only_alaska_and_hawaii():
    records = load_reference_data()
    codes = [r.code for r in filter_contiguous(records, False)]
    assert codes == ["AK", "HI"]
