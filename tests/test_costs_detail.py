"""
Cost composer and detail record tests.

Tests:
1-5.   Cost lines: quantity x price, missing prices, total, formulas
6-10.  Detail record: input rows, price rows as typed, output rows, precision
11-12. compute() end to end for Scenarios A and B
"""

import pytest

from sitecalc.calculators import engine
from sitecalc.calculators.base import CostRule, quantity
from sitecalc.calculators.costs import compose_costs


def _costs_by_key(outcome):
    return {c.key: c for c in outcome.costs}


# ============================================================
# Cost composer
# ============================================================

def test_cost_is_quantity_times_price():
    results = [quantity("cement_bags", 2.5, "NOS", "x")]
    rules = [CostRule("cement_cost", "Cement Cost", "cement_bags", "cement_price", "C1")]
    items = compose_costs(results, {"cement_price": 400.0}, rules, currency="INR")
    assert items[0].total_cost == pytest.approx(1000.0)
    assert items[0].quantity == 2.5
    assert items[0].unit_price == 400.0
    assert items[0].currency == "INR"
    assert items[0].formula == "C1*(x)"


def test_missing_price_costs_zero_but_keeps_quantity():
    results = [quantity("cement_bags", 2.5, "NOS", "x")]
    rules = [CostRule("cement_cost", "Cement Cost", "cement_bags", "cement_price", "C1")]
    items = compose_costs(results, {}, rules, currency="INR")
    assert items[0].quantity == 2.5
    assert items[0].total_cost == 0.0


def test_total_line_sums_components():
    results = [quantity("cement_bags", 2, "NOS", "a"), quantity("sand_volume", 0.5, "m3", "b")]
    rules = [
        CostRule("cement_cost", "Cement Cost", "cement_bags", "cement_price", "C1"),
        CostRule("sand_cost", "Sand Cost", "sand_volume", "sand_price", "S1"),
    ]
    items = compose_costs(results, {"cement_price": 400, "sand_price": 1500}, rules, currency="INR")
    total = items[-1]
    assert total.key == "total_cost"
    assert total.total_cost == pytest.approx(800 + 750)
    assert total.formula == "Cement Cost + Sand Cost"


def test_default_rules_price_quantities_by_key():
    """Without declared rules a price named after a quantity prices it."""
    results = [quantity("no_of_bricks", 100, "NOS", "n"), quantity("volume_of_wall", 1.3, "m3", "v")]
    items = compose_costs(results, {"no_of_bricks": 8.0}, currency="INR")
    assert [i.key for i in items] == ["no_of_bricks_cost", "total_cost"]
    assert items[0].total_cost == pytest.approx(800.0)
    assert items[0].label == "No Of Bricks Cost"


def test_currency_defaults_from_settings():
    items = compose_costs([], {})
    assert items[0].currency == "INR"
    assert items[0].total_cost == 0.0


# ============================================================
# Detail record
# ============================================================

def test_detail_input_rows_echo_typed_values(scenario_a_inputs):
    outcome = engine.compute("aac_block", scenario_a_inputs, {"brick_price": "50"})
    rows = {r.symbol: r for r in outcome.detail.inputs}
    assert rows["L"].value_text == "600 mm"
    assert rows["L"].label_key == "brickWorkAndPlaster.aacBlock.brick_length"
    assert rows["l"].value_text == "5 m"
    assert rows["W2"].value_text == "0 m"


def test_detail_price_rows(scenario_a_inputs):
    outcome = engine.compute("aac_block", scenario_a_inputs, {"brick_price": "50"})
    rows = {r.symbol: r for r in outcome.detail.inputs}
    assert rows["B1"].value_text == "50 currency per unit"
    assert rows["B1"].label_key == "brickWorkAndPlaster.aacBlock.brick_price"


def test_detail_output_rows_pair_formula_and_value(scenario_a_inputs):
    outcome = engine.compute("aac_block", scenario_a_inputs, {"brick_price": "50"})
    rows = {r.title_key: r for r in outcome.detail.outputs}
    volume = rows["brickWorkAndPlaster.aacBlock.results.volume_of_wall"]
    assert volume.formula == "(l*h*t)-(W1*H1*t+W2*H2*t+W3*H3*t)"
    assert volume.value_text == "1.300 m3"
    block = rows["brickWorkAndPlaster.aacBlock.results.brick_with_mortar_volume"]
    assert block.value_text == "0.013023 m3"


def test_detail_cost_rows_use_currency(scenario_a_inputs):
    outcome = engine.compute("aac_block", scenario_a_inputs, {"brick_price": "50"})
    rows = {r.title_key: r for r in outcome.detail.outputs}
    cost = rows["brickWorkAndPlaster.aacBlock.results.brick_cost"]
    assert cost.value_text.endswith(" INR")
    assert cost.formula.startswith("B1*(")
    assert "brickWorkAndPlaster.aacBlock.results.total_cost" in rows


def test_detail_cost_precision_override(scenario_b_inputs):
    outcome = engine.compute("sand_plaster", scenario_b_inputs, {"cement_price": "400"}, precision=2)
    rows = {r.title_key: r for r in outcome.detail.outputs}
    assert rows["brickWorkAndPlaster.sandPlaster.results.cement_cost"].value_text == "376.16 INR"
    # Quantities keep their own precision
    assert rows["brickWorkAndPlaster.sandPlaster.results.mortar_dry_volume"].value_text == "0.230 m3"


# ============================================================
# compute() end to end
# ============================================================

def test_scenario_a_brick_cost(scenario_a_inputs):
    outcome = engine.compute("aac_block", scenario_a_inputs, {"brick_price": "50"})
    costs = _costs_by_key(outcome)
    bricks = 1.3 / (0.605 * 0.205 * 0.105)
    assert costs["brick_cost"].total_cost == pytest.approx(bricks * 50)
    assert costs["brick_cost"].total_cost == pytest.approx(4990.8, abs=1.0)
    assert outcome.total_cost == pytest.approx(bricks * 50)


def test_scenario_b_costs(scenario_b_inputs):
    outcome = engine.compute("sand_plaster", scenario_b_inputs,
                             {"cement_price": "400", "sand_price": "1500"})
    costs = _costs_by_key(outcome)
    assert costs["cement_cost"].total_cost == pytest.approx(0.2304 / 0.245 * 400)
    assert round(costs["cement_cost"].total_cost, 3) == pytest.approx(376.163)
    assert round(costs["sand_cost"].total_cost, 3) == pytest.approx(296.229)
    assert round(outcome.total_cost, 3) == pytest.approx(672.392)


def test_detail_price_rows_echo_typed_price(scenario_b_inputs):
    outcome = engine.compute("sand_plaster", scenario_b_inputs, {"cement_price": "1234.5678", "sand_price": 1500.0})
    rows = {r.symbol: r for r in outcome.detail.inputs}
    assert rows["C1"].value_text.startswith("1234.5678 ")
    assert rows["S1"].value_text.startswith("1500 ")
