"""
Detail Record Builder: the "view detailed" table for one calculation.

Input rows echo what the user typed (before unit conversion) with the field
unit and symbol. Output rows pair each quantity and cost with the literal
formula that produced it.
"""

from typing import List, Mapping, Optional

from ..config import settings
from .base import CalculatorDefinition, fmt_const
from .results import (
    CostLineItem, DetailRecord, FormulaResult, InputRow, NormalizedInput, OutputRow,
)


def format_value(value: float, unit: str, precision: int) -> str:
    text = f"{value:.{precision}f}"
    return f"{text} {unit}" if unit else text


def input_rows(definition: CalculatorDefinition, inp: NormalizedInput,
               prices: Optional[Mapping[str, float]] = None,
               price_text: Optional[Mapping[str, str]] = None) -> List[InputRow]:
    prices = prices or {}
    price_text = price_text or {}
    rows = []
    for schema in definition.fields:
        text = inp.display.get(schema.name, "0")
        rows.append(InputRow(
            label_key=definition.input_label_key(schema),
            symbol=schema.symbol,
            value_text=f"{text} {schema.unit}" if schema.unit else text,
        ))
    for rule in definition.cost_rules:
        price = prices.get(rule.price_field)
        text = price_text.get(rule.price_field)
        if text is None:
            text = fmt_const(price) if price is not None else "0"
        rows.append(InputRow(
            label_key=f"{definition.i18n_prefix}.{rule.price_field}",
            symbol=rule.symbol,
            value_text=f"{text} {rule.price_unit}",
        ))
    return rows


def output_rows(definition: CalculatorDefinition, results: List[FormulaResult],
                costs: List[CostLineItem], precision: int) -> List[OutputRow]:
    rules = {rule.key: rule for rule in definition.cost_rules}
    rows = [
        OutputRow(
            title_key=r.title_key or definition.result_title_key(r.key),
            formula=r.formula_expression,
            value_text=format_value(r.value, r.unit, r.precision),
        )
        for r in results
    ]
    for item in costs:
        rule = rules.get(item.key)
        rows.append(OutputRow(
            title_key=definition.cost_label_key(rule) if rule else definition.result_title_key(item.key),
            formula=item.formula,
            value_text=format_value(item.total_cost, item.currency, precision),
        ))
    return rows


def build_detail(inp: NormalizedInput, results: List[FormulaResult], costs: List[CostLineItem],
                 definition: CalculatorDefinition, prices: Optional[Mapping[str, float]] = None,
                 precision: Optional[int] = None,
                 price_text: Optional[Mapping[str, str]] = None) -> DetailRecord:
    """
    Assemble the ordered DetailRecord.

    Args:
        inp: NormalizedInput (its display text is what the input rows show)
        results: FormulaResults, each rendered with its own precision
        costs: CostLineItems, rendered at the display precision
        definition: the calculator definition that supplies labels and symbols
        prices: unit prices actually used, echoed as input rows
        precision: cost precision (settings.DISPLAY_PRECISION)
        price_text: prices as typed; a price missing here is rendered from prices
    """
    if precision is None:
        precision = settings.DISPLAY_PRECISION
    return DetailRecord(
        inputs=input_rows(definition, inp, prices, price_text),
        outputs=output_rows(definition, results, costs, precision),
    )
