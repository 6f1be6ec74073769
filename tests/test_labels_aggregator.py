"""
Label derivation and result aggregator tests.

Tests:
1-4.  derive_label / unit_from_key on stored history keys
5-6.  storage keys built from result units and currency
7-13. aggregate() precision and currency keys, history_payload(), summary_rows()
"""

import pytest

from sitecalc.calculators import engine
from sitecalc.calculators.aggregator import aggregate, history_payload, summary_rows
from sitecalc.calculators.labels import (
    cost_storage_key, derive_label, storage_key, title_from_key, unit_from_key,
)


# ============================================================
# Labels
# ============================================================

@pytest.mark.parametrize("key,label", [
    ("cement_bags_nos", "Cement Bags"),
    ("brick_cost_inr", "Brick Cost"),
    ("steel_ton", "Steel"),
    ("water_liter", "Water"),
    ("paint_area_sqft", "Paint Area"),
    ("total_cost_inr", "Total Cost"),
    ("sand_volume", "Sand Volume"),
])
def test_derive_label(key, label):
    assert derive_label(key) == label


def test_only_one_trailing_unit_is_stripped():
    """'Bags' is part of the name once the unit token is gone."""
    assert derive_label("no_of_bags_nos") == "No Of Bags"
    assert derive_label("kg") == "Kg"


def test_unit_from_key():
    assert unit_from_key("cement_bags_nos") == "Nos"
    assert unit_from_key("weight_of_material_kg") == "Kg"
    assert unit_from_key("sand_volume") == ""


def test_title_from_key_keeps_inner_capitals():
    assert title_from_key("steel_column_type1") == "Steel Column Type1"


def test_storage_key_appends_unit_token():
    assert storage_key("cement_bags", "NOS") == "cement_bags_nos"
    assert storage_key("weight_of_material", "kg") == "weight_of_material_kg"
    assert storage_key("sand_volume", "m3") == "sand_volume"
    assert storage_key("plaster_area", "sq.m.") == "plaster_area"
    assert storage_key("unit_weight", "kg/m") == "unit_weight"


def test_cost_storage_key():
    assert cost_storage_key("brick_cost", "INR") == "brick_cost_inr"


# ============================================================
# Aggregator
# ============================================================

def test_aggregate_scenario_b(scenario_b_inputs):
    outcome = engine.compute("sand_plaster", scenario_b_inputs, {"cement_price": "400", "sand_price": "1500"})
    agg = aggregate(outcome.quantities, outcome.costs)
    assert agg["material_quantity"] == {
        "plaster_area": 12.0,
        "mortar_dry_volume": 0.23,
        "cement_bags_nos": 0.94,
        "sand_volume": 0.197,
    }
    assert agg["work_cost_breakdown"] == {
        "cement_cost_inr": 376.163,
        "sand_cost_inr": 296.229,
        "total_cost_inr": 672.392,
    }


def test_history_payload_shape():
    agg = {"material_quantity": {"cement_bags_nos": 1.0}, "work_cost_breakdown": {"total_cost_inr": 5.0}}
    payload = history_payload(agg)
    assert payload == {
        "calculation": {
            "material_quantity": {"cement_bags_nos": 1.0},
            "work_cost_breakdown": {"total_cost_inr": 5.0},
        },
        "ai_insights": {},
    }
    assert history_payload(agg, {"tip": "x"})["ai_insights"] == {"tip": "x"}


def test_every_stored_key_round_trips_to_its_label(scenario_a_inputs):
    """Labels derived from stored keys match the result and cost names."""
    for calculator_id, raw in (("aac_block", scenario_a_inputs), ("clay_brick", scenario_a_inputs),
                               ("gypsum_plaster", {}), ("steel_column_type_3", {})):
        outcome = engine.compute(calculator_id, raw, {})
        agg = aggregate(outcome.quantities, outcome.costs)
        expected = [title_from_key(r.key) for r in outcome.quantities]
        assert [derive_label(k) for k in agg["material_quantity"]] == expected
        expected_costs = [title_from_key(c.key) for c in outcome.costs]
        assert [derive_label(k) for k in agg["work_cost_breakdown"]] == expected_costs


def test_summary_rows_from_stored_payload():
    payload = {
        "calculation": {
            "material_quantity": {"cement_bags_nos": 0.94, "sand_volume": 0.197},
            "work_cost_breakdown": {"cement_cost_inr": 376.163},
        },
        "ai_insights": {"note": "ignored"},
    }
    rows = summary_rows(payload)
    assert rows["materials"] == [
        {"material": "Cement Bags", "quantity": 0.94, "unit": "Nos"},
        {"material": "Sand Volume", "quantity": 0.197, "unit": ""},
    ]
    assert rows["work_costs"] == [{"work": "Cement Cost", "amount": 376.163}]
    assert summary_rows(None) == {"materials": [], "work_costs": []}
    assert summary_rows({"ai_insights": {}}) == {"materials": [], "work_costs": []}


def test_aggregate_keeps_declared_quantity_precision():
    """A closer piece is far below a thousandth of a cubic metre and must not store as 0."""
    raw = {"brick_length": "190", "brick_width": "90", "brick_thickness": "90", "closer_count": "8"}
    outcome = engine.compute("quarter_bat", raw, {})
    agg = aggregate(outcome.quantities, outcome.costs)
    assert agg["material_quantity"]["closer_volume"] == pytest.approx(0.000385, abs=1e-6)
    assert agg["material_quantity"]["closer_volume"] > 0


def test_aggregate_rounds_costs_to_display_precision(scenario_a_inputs):
    outcome = engine.compute("aac_block", scenario_a_inputs, {"brick_price": "50"})
    agg = aggregate(outcome.quantities, outcome.costs)
    assert agg["material_quantity"]["brick_with_mortar_volume"] == pytest.approx(0.013023)
    cost = agg["work_cost_breakdown"]["brick_cost_inr"]
    assert cost == round(cost, 3)


def test_currency_without_unit_token_keeps_cost_keys_bare(scenario_b_inputs):
    outcome = engine.compute("sand_plaster", scenario_b_inputs,
                             {"cement_price": "400", "sand_price": "1500"}, currency="USD")
    agg = aggregate(outcome.quantities, outcome.costs)
    assert list(agg["work_cost_breakdown"]) == ["cement_cost", "sand_cost", "total_cost"]
    assert [derive_label(k) for k in agg["work_cost_breakdown"]] == ["Cement Cost", "Sand Cost", "Total Cost"]
    assert cost_storage_key("brick_cost", "eur") == "brick_cost"
