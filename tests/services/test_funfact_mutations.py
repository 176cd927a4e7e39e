"""Fun fact mutations — POST append, PATCH overwrite, DELETE remove over HTTP.

Invariants:
    - POST upserts and returns {"stateCode", "funfacts"}
    - PATCH requires index and funfact, DELETE requires index (400 otherwise)
    - Out-of-range index → 400 "Invalid index"; no stored entry → 404
    - Codes that are not two letters → 400 on every mutation, nothing stored
    - A POST is visible exactly once, in order, through GET /states
"""

import pytest


async def _post(client, code, facts):
    return await client.post(f"/states/{code}/funfact", json={"funfacts": facts})


async def test_post_creates_entry(client):
    res = await _post(client, "ks", ["f1", "f2"])
    assert res.status_code == 200
    assert res.json() == {"stateCode": "KS", "funfacts": ["f1", "f2"]}


async def test_post_appends_in_order(client):
    await _post(client, "KS", ["f1", "f2"])
    res = await _post(client, "KS", ["f3"])
    assert res.json()["funfacts"] == ["f1", "f2", "f3"]


async def test_post_same_facts_twice_duplicates(client):
    await _post(client, "KS", ["dup"])
    res = await _post(client, "KS", ["dup"])
    assert res.json()["funfacts"] == ["dup", "dup"]


async def test_post_without_funfacts_is_bad_request(client):
    res = await client.post("/states/KS/funfact", json={})
    assert res.status_code == 400
    assert "funfacts" in res.json()["error"]


async def test_post_then_list_reflects_facts_once(client):
    await _post(client, "TX", ["a", "b"])
    res = await client.get("/states")
    texas = next(s for s in res.json()["states"] if s["code"] == "TX")
    assert texas["funfacts"] == ["a", "b"]


async def test_post_then_random_fact_reaches_stored(client):
    await _post(client, "CA", ["Golden Gate"])
    res = await client.get("/states/CA/funfact")
    assert res.json() == {"funfact": "Golden Gate"}


async def test_patch_overwrites_position(client):
    await _post(client, "KS", ["a", "b"])
    res = await client.patch("/states/ks/funfact", json={"index": 1, "funfact": "X"})
    assert res.status_code == 200
    assert res.json() == {"stateCode": "KS", "funfacts": ["X", "b"]}


@pytest.mark.parametrize("body", [
    {"funfact": "X"},
    {"index": 1},
    {"index": 1, "funfact": ""},
    {},
])
async def test_patch_missing_fields_is_bad_request(client, body):
    await _post(client, "KS", ["a"])
    res = await client.patch("/states/KS/funfact", json=body)
    assert res.status_code == 400
    assert res.json() == {"error": "Index and funfact are required"}


async def test_patch_without_body_is_bad_request(client):
    res = await client.patch("/states/KS/funfact")
    assert res.status_code == 400
    assert res.json() == {"error": "Index and funfact are required"}


@pytest.mark.parametrize("index", [0, 3])
async def test_patch_out_of_range_is_invalid_index(client, index):
    await _post(client, "KS", ["a", "b"])
    res = await client.patch(
        "/states/KS/funfact", json={"index": index, "funfact": "X"},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid index"}


async def test_patch_without_stored_entry_returns_404(client):
    res = await client.patch("/states/KS/funfact", json={"index": 1, "funfact": "X"})
    assert res.status_code == 404
    assert res.json() == {"error": "State not found"}


async def test_patch_non_integer_index_is_bad_request(client):
    res = await client.patch(
        "/states/KS/funfact", json={"index": "first", "funfact": "X"},
    )
    assert res.status_code == 400
    assert "index" in res.json()["error"]


async def test_delete_removes_and_reindexes(client):
    await _post(client, "KS", ["a", "b", "c"])
    res = await client.request("DELETE", "/states/KS/funfact", json={"index": 1})
    assert res.status_code == 200
    assert res.json()["funfacts"] == ["b", "c"]

    res = await client.request("DELETE", "/states/KS/funfact", json={"index": 2})
    assert res.json()["funfacts"] == ["b"]


async def test_delete_without_index_is_bad_request(client):
    res = await client.request("DELETE", "/states/KS/funfact", json={})
    assert res.status_code == 400
    assert res.json() == {"error": "Index is required"}


async def test_delete_out_of_range_is_invalid_index(client):
    await _post(client, "KS", ["a"])
    res = await client.request("DELETE", "/states/KS/funfact", json={"index": 2})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid index"}


async def test_delete_without_stored_entry_returns_404(client):
    res = await client.request("DELETE", "/states/TX/funfact", json={"index": 1})
    assert res.status_code == 404


@pytest.mark.parametrize("code", ["california", "K", "K1", "%C3%A9s"])
async def test_post_malformed_code_is_bad_request(client, code):
    res = await _post(client, code, ["f1"])
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid state abbreviation parameter"}
    listing = await client.get("/states")
    assert all(s["funfacts"] != ["f1"] for s in listing.json()["states"])


async def test_post_unknown_but_well_formed_code_upserts(client):
    res = await _post(client, "zz", ["f1"])
    assert res.status_code == 200
    assert res.json() == {"stateCode": "ZZ", "funfacts": ["f1"]}


async def test_patch_malformed_code_is_bad_request(client):
    res = await client.patch(
        "/states/texas/funfact", json={"index": 1, "funfact": "X"},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid state abbreviation parameter"}


async def test_delete_malformed_code_is_bad_request(client):
    res = await client.request(
        "DELETE", "/states/texas/funfact", json={"index": 1},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid state abbreviation parameter"}
