"""Calculator Routes — listing, definitions, evaluation and sensitivity over HTTP.

Invariants:
    - Incomplete input is a 200 with isValid=false, never an error
    - Unknown unit → 400 UNKNOWN_UNIT; unknown calculator → 404
    - Malformed body or a value outside an input's options or bounds → 400 VALIDATION_ERROR
    - Figures that overflow → 200 with isValid=false, never a 500
    - Body locale beats ?locale=, which beats Accept-Language
"""

import pytest

COMPOUND = {
    "initialInvestment": 10000,
    "interestRate": 7,
    "investmentPeriod": 20,
    "compoundingFrequency": "annually",
}


# --- Listing and definitions ---


async def test_list_calculators(client):
    res = await client.get("/api/v1/calculators")
    assert res.status_code == 200
    data = res.json()
    assert data["locale"] == "en"
    assert {c["id"] for c in data["calculators"]} == {"calorie", "compound-interest", "mulch-gravel"}


async def test_list_uses_accept_language(client):
    res = await client.get("/api/v1/calculators", headers={"Accept-Language": "pt-BR,pt;q=0.9"})
    names = {c["id"]: c["name"] for c in res.json()["calculators"]}
    assert names["compound-interest"] == "Calculadora de Juros Compostos"


async def test_get_by_slug(client):
    res = await client.get("/api/v1/calculators/calculadora-calorias", params={"locale": "es"})
    assert res.status_code == 200
    data = res.json()
    assert data["id"] == "calorie"
    assert data["text"]["inputs"]["goal"]["label"] == "Objetivo"
    assert data["defaults"]["units"] == {"weight": "lbs", "height": "cm"}


async def test_unknown_calculator_404(client):
    res = await client.get("/api/v1/calculators/bmi")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


# --- Evaluation ---


async def test_evaluate_compound_interest(client):
    res = await client.post("/api/v1/calculators/compound-interest/evaluate", json={"values": COMPOUND})
    assert res.status_code == 200
    data = res.json()
    assert data["isValid"] is True
    assert data["values"]["futureValue"] == pytest.approx(38696.84, abs=0.01)
    assert data["formatted"]["futureValue"] == "$38,697"
    assert data["visibility"]["results"]["inflationAdjustedValue"] is False


async def test_incomplete_input_is_200_invalid(client):
    res = await client.post("/api/v1/calculators/calorie/evaluate", json={"values": {}})
    assert res.status_code == 200
    data = res.json()
    assert data["isValid"] is False
    assert data["values"] == {}
    assert data["summary"] == ""


async def test_unknown_unit_400(client):
    res = await client.post(
        "/api/v1/calculators/calorie/evaluate",
        json={"values": {"weight": 70, "height": 175}, "units": {"weight": "st"}},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "UNKNOWN_UNIT"
    assert error["context"]["field"] == "weight"


async def test_malformed_values_400(client):
    res = await client.post(
        "/api/v1/calculators/calorie/evaluate", json={"values": {"weight": [1, 2]}},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_value_outside_options_400(client):
    res = await client.post(
        "/api/v1/calculators/mulch-gravel/evaluate", json={"values": {"bagSize": "-2"}},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["context"]["field"] == "bagSize"
    assert error["context"]["calculator_id"] == "mulch-gravel"


async def test_period_beyond_max_400(client):
    res = await client.post(
        "/api/v1/calculators/compound-interest/evaluate",
        json={"values": {**COMPOUND, "interestRate": 30, "investmentPeriod": 5000,
                         "compoundingFrequency": "daily"}},
    )
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "investmentPeriod"


async def test_overflowing_balance_is_200_invalid(client):
    res = await client.post(
        "/api/v1/calculators/compound-interest/evaluate",
        json={"values": {**COMPOUND, "initialInvestment": 1e300, "interestRate": 30,
                         "investmentPeriod": 100, "compoundingFrequency": "daily"}},
    )
    assert res.status_code == 200
    assert res.json()["isValid"] is False


async def test_overflowing_area_is_200_invalid(client):
    res = await client.post(
        "/api/v1/calculators/mulch-gravel/evaluate",
        json={"values": {"length": 1e200, "width": 1e200}},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["isValid"] is False
    assert data["values"] == {}


async def test_body_locale_beats_query(client):
    res = await client.post(
        "/api/v1/calculators/compound-interest/evaluate",
        params={"locale": "pt"},
        json={"values": COMPOUND, "locale": "es-MX"},
    )
    data = res.json()
    assert data["locale"] == "es"
    assert data["summary"].startswith("Invierte")


async def test_dual_unit_pair(client):
    res = await client.post(
        "/api/v1/calculators/calorie/evaluate",
        json={
            "values": {"gender": "female", "age": 30, "weight": 160, "height": {"primary": 5, "secondary": 5}},
            "units": {"height": "ft_in"},
        },
    )
    assert res.json()["values"]["bmr"] == pytest.approx(1446.6222, abs=1e-3)


# --- Sensitivity ---


async def test_sensitivity_defaults(client):
    res = await client.post("/api/v1/calculators/compound-interest/sensitivity", json={"values": COMPOUND})
    assert res.status_code == 200
    data = res.json()
    assert data["inputId"] == "interestRate"
    assert data["rangePercent"] == 25
    assert len(data["points"]) == 9


async def test_sensitivity_overrides(client):
    res = await client.post(
        "/api/v1/calculators/compound-interest/sensitivity",
        json={"values": COMPOUND, "input_id": "investmentPeriod", "steps": 3, "range_percent": 50},
    )
    points = res.json()["points"]
    assert [p["input"] for p in points] == pytest.approx([10, 20, 30])


async def test_sensitivity_unknown_input_400(client):
    res = await client.post(
        "/api/v1/calculators/compound-interest/sensitivity",
        json={"values": COMPOUND, "input_id": "nope"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "input_id"


async def test_sensitivity_steps_out_of_range_400(client):
    res = await client.post(
        "/api/v1/calculators/compound-interest/sensitivity",
        json={"values": COMPOUND, "steps": 2},
    )
    assert res.status_code == 400
