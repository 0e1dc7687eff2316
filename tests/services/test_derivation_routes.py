"""Derivation Routes: HTTP tests for POST /derivations, strategies and health.

Invariants:
    - A derivable descriptor returns 200 with rendered declarations
    - A rejected descriptor returns the 422 error envelope with type context
    - Malformed bodies return 400 VALIDATION_ERROR
"""

from refinery.config import Settings, get_settings
from refinery.main import app
from tests.payloads import percent_descriptor, unit_vector_descriptor


async def test_derive_unit_vector_returns_refine(client):
    res = await client.post(
        "/api/v1/derivations", json={"descriptor": unit_vector_descriptor()},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["type_name"] == "UnitVector"
    assert body["strategy"] == "plain"
    [declaration] = body["declarations"]
    assert declaration["name"] == "refine"
    assert declaration["namespace"] == "UnitVector"
    assert declaration["visibility"] == "public export"
    assert declaration["signature"] == (
        "refine : {0 n : Nat} -> (v : Vect n Double) -> Maybe (UnitVector n)"
    )
    assert body["module"].startswith("namespace UnitVector\n")


async def test_derive_float_literals_returns_three_declarations(client):
    res = await client.post(
        "/api/v1/derivations",
        json={"strategy": "float_literals", "descriptor": percent_descriptor()},
    )
    assert res.status_code == 200
    names = [d["name"] for d in res.json()["declarations"]]
    assert names == ["refine", "fromInteger", "fromDouble"]


async def test_request_visibility_overrides_default(client):
    res = await client.post(
        "/api/v1/derivations",
        json={"visibility": "export", "descriptor": percent_descriptor()},
    )
    assert res.json()["declarations"][0]["source"].startswith("export\n")


async def test_two_constructors_return_422_with_context(client):
    descriptor = unit_vector_descriptor()
    descriptor["constructors"].append(descriptor["constructors"][0])
    res = await client.post("/api/v1/derivations", json={"descriptor": descriptor})
    assert res.status_code == 422
    error = res.json()["error"]
    assert error["code"] == "NOT_SINGLE_CONSTRUCTOR"
    assert error["category"] == "shape"
    assert error["context"]["type_name"] == "UnitVector"
    assert error["context"]["strategy"] == "plain"
    assert error["context"]["location"] == "src/Data/UnitVector.idr:12:1"


async def test_missing_proof_returns_shape_mismatch(client):
    descriptor = percent_descriptor()
    del descriptor["constructors"][0]["args"][1]
    res = await client.post(
        "/api/v1/derivations",
        json={"strategy": "integer_literals", "descriptor": descriptor},
    )
    assert res.status_code == 422
    error = res.json()["error"]
    assert error["code"] == "SHAPE_MISMATCH"
    assert "has no proof argument" in error["message"]
    assert error["context"]["strategy"] == "integer_literals"


async def test_malformed_body_returns_400(client):
    res = await client.post("/api/v1/derivations", json={"strategy": "plain"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("descriptor") for d in error["details"])


async def test_settings_override_changes_generated_names(client):
    app.dependency_overrides[get_settings] = lambda: Settings(
        refine_name="validate", maybe_type="Option",
    )
    res = await client.post(
        "/api/v1/derivations", json={"descriptor": percent_descriptor()},
    )
    [declaration] = res.json()["declarations"]
    assert declaration["name"] == "validate"
    assert declaration["signature"] == "validate : (v : Double) -> Option Percent"


async def test_list_strategies(client):
    res = await client.get("/api/v1/derivations/strategies")
    assert res.status_code == 200
    strategies = {s["name"]: s["literals"] for s in res.json()}
    assert strategies == {
        "plain": [],
        "integer_literals": ["integer"],
        "float_literals": ["integer", "float"],
        "string_literals": ["string"],
    }


async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_negative_predicate_bound_renders_in_clause(client):
    descriptor = percent_descriptor()
    predicate = descriptor["constructors"][0]["args"][1]["type"]
    predicate["fn"]["fn"]["arg"] = {"kind": "lit", "value": -1}
    res = await client.post("/api/v1/derivations", json={"descriptor": descriptor})
    assert res.status_code == 200
    clause = res.json()["declarations"][0]["clause"]
    assert clause.startswith("refine v = case decide (FromTo (-1) 100) v of")
