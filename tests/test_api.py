"""
HTTP surface tests.

Tests:
1-2.  /health, /api/calculators
3-6.  POST /api/calculate: results, 404, saved prices, save to history
7-9.  /api/history list, search, detail with summary rows
10-12. /api/prices seed, list, patch
"""

import pytest

from sitecalc import models
from sitecalc.routers.prices import DEFAULT_PRICES


def _seed(client):
    response = client.post("/api/prices/seed")
    assert response.status_code == 200
    return response


# ============================================================
# Health and catalogue
# ============================================================

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_calculators(client):
    response = client.get("/api/calculators")
    assert response.status_code == 200
    data = {c["id"]: c for c in response.json()}
    assert "aac_block" in data
    assert data["sand_plaster"]["price_fields"] == ["cement_price", "sand_price"]
    assert [f["symbol"] for f in data["sand_plaster"]["fields"]] == ["L", "W", "T", "c", "s"]

    steel = client.get("/api/calculators", params={"family": "steel"}).json()
    assert len(steel) == 15
    assert all(c["family"] == "steel" for c in steel)


# ============================================================
# Calculate
# ============================================================

def test_calculate_scenario_b(client, scenario_b_inputs):
    response = client.post("/api/calculate/sand_plaster", json={
        "inputs": scenario_b_inputs,
        "prices": {"cement_price": 400, "sand_price": "1500"},
    })
    assert response.status_code == 200
    data = response.json()
    quantities = {q["key"]: q for q in data["quantities"]}
    assert quantities["mortar_dry_volume"]["value"] == pytest.approx(0.2304)
    assert data["payload"]["calculation"]["work_cost_breakdown"]["total_cost_inr"] == 672.392
    assert {"material": "Cement Bags", "quantity": 0.94, "unit": "Nos"} in data["summary"]["materials"]
    assert data["history_id"] is None
    assert len(data["detail"]["outputs"]) == len(data["quantities"]) + len(data["costs"])


def test_calculate_unknown_type_is_404(client):
    response = client.post("/api/calculate/does-not-exist", json={"inputs": {}})
    assert response.status_code == 404
    assert "does-not-exist" in response.json()["detail"]


def test_calculate_with_saved_prices(client, scenario_b_inputs):
    _seed(client)
    response = client.post("/api/calculate/sand_plaster", json={
        "inputs": scenario_b_inputs,
        "prices": {"cement_price": "500"},
        "use_saved_prices": True,
    })
    costs = {c["key"]: c for c in response.json()["costs"]}
    # The request price wins, the missing one comes from the book
    assert costs["cement_cost"]["unit_price"] == 500.0
    assert costs["sand_cost"]["unit_price"] == DEFAULT_PRICES["sand_price"]["price"]


def test_calculate_and_save(client, db, scenario_a_inputs):
    response = client.post("/api/calculate/aac_block", json={
        "inputs": scenario_a_inputs,
        "prices": {"brick_price": 50},
        "save": True,
    })
    history_id = response.json()["history_id"]
    assert history_id
    record = db.query(models.CalculationRecord).filter(models.CalculationRecord.id == history_id).first()
    assert record.calculator_type == "aac_block"
    assert record.generated_content["calculation"]["material_quantity"]["volume_of_wall"] == 1.3


# ============================================================
# History
# ============================================================

def _save(client, calculator_id, inputs, prices=None):
    response = client.post(f"/api/calculate/{calculator_id}", json={
        "inputs": inputs, "prices": prices or {}, "save": True,
    })
    return response.json()["history_id"]


def test_history_list_and_search(client, scenario_a_inputs, scenario_b_inputs):
    _save(client, "aac_block", scenario_a_inputs)
    _save(client, "sand_plaster", scenario_b_inputs)
    items = client.get("/api/history").json()
    assert {i["calculator_type"] for i in items} == {"aac_block", "sand_plaster"}
    assert "calculation" in items[0]["generated_content"]

    found = client.get("/api/history", params={"q": "Sand"}).json()
    assert [i["calculator_type"] for i in found] == ["sand_plaster"]


def test_history_detail_has_summary(client, scenario_b_inputs):
    history_id = _save(client, "sand_plaster", scenario_b_inputs, {"cement_price": 400, "sand_price": 1500})
    response = client.get(f"/api/history/{history_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Sand Plaster"
    assert data["inputs"]["thickness"] == "0.012"
    assert {"work": "Total Cost", "amount": 672.392} in data["summary"]["work_costs"]
    assert data["detail"]["inputs"][0]["symbol"] == "L"


def test_history_detail_not_found(client):
    response = client.get("/api/history/missing")
    assert response.status_code == 404


# ============================================================
# Price book
# ============================================================

def test_seed_prices_is_idempotent(client):
    assert _seed(client).json()["seeded"] == len(DEFAULT_PRICES)
    assert _seed(client).json()["seeded"] == 0
    prices = client.get("/api/prices/").json()
    assert {p["price_key"] for p in prices} == set(DEFAULT_PRICES)


def test_update_price(client):
    _seed(client)
    response = client.patch("/api/prices/cement_price", json={"price": 425.0})
    assert response.status_code == 200
    assert response.json()["price"] == 425.0
    assert response.json()["unit"] == DEFAULT_PRICES["cement_price"]["unit"]


def test_update_unknown_price_is_404(client):
    response = client.patch("/api/prices/gold_price", json={"price": 1.0})
    assert response.status_code == 404
