"""
Building blocks shared by every registered calculator.

A calculator is data, not a subclass: a CalculatorDefinition names its input
fields, its constants, the pure compute function that turns a NormalizedInput
into FormulaResults, and the cost rules that price those results.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Tuple

from .results import FormulaResult, NormalizedInput

ComputeFn = Callable[[NormalizedInput, Mapping[str, float]], List[FormulaResult]]

# Shared domain constants
CEMENT_BAG_VOLUME = 0.035       # m³ in one 50 kg cement bag
MM_PER_M = 1000.0


@dataclass(frozen=True)
class FieldSchema:
    """One input box on a calculator form."""
    name: str
    symbol: str
    unit: str = "m"
    divide_by: float = 1.0      # unit conversion applied after parsing, e.g. 1000 for mm
    label_key: str = ""

    def convert(self, value: float) -> float:
        if self.divide_by == 1.0:
            return value
        return guarded_div(value, self.divide_by)


@dataclass(frozen=True)
class CostRule:
    """Prices one FormulaResult: total = quantity * unit price."""
    key: str
    label: str
    quantity_key: str
    price_field: str
    symbol: str
    price_unit: str = "currency per unit"
    label_key: str = ""


@dataclass(frozen=True)
class CalculatorDefinition:
    id: str
    title: str
    family: str
    i18n_prefix: str
    fields: Tuple[FieldSchema, ...]
    compute_fn: ComputeFn
    constants: Mapping[str, float] = field(default_factory=dict)
    cost_rules: Tuple[CostRule, ...] = ()

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def price_fields(self) -> List[str]:
        return [rule.price_field for rule in self.cost_rules]

    def input_label_key(self, schema: FieldSchema) -> str:
        return schema.label_key or f"{self.i18n_prefix}.{schema.name}"

    def result_title_key(self, result_key: str) -> str:
        return f"{self.i18n_prefix}.results.{result_key}"

    def cost_label_key(self, rule: CostRule) -> str:
        return rule.label_key or f"{self.i18n_prefix}.results.{rule.key}"


# --- Numeric guards ---

def finite(value: float) -> float:
    """NaN and ±Infinity collapse to 0."""
    if value is None or not math.isfinite(value):
        return 0.0
    return float(value)


def guarded_div(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when the denominator is ≤ 0."""
    if denominator is None or not math.isfinite(denominator) or denominator <= 0:
        return 0.0
    return finite(numerator / denominator)


def bar_count(span: float, spacing: float) -> float:
    """Bars laid at a spacing across a span: floor(span/spacing)+1, 0 if spacing ≤ 0."""
    if spacing is None or not math.isfinite(spacing) or spacing <= 0:
        return 0.0
    return float(math.floor(finite(span / spacing)) + 1)


def sq(value: float) -> float:
    """value squared; overflows to inf (and then 0) rather than raising."""
    return value * value


def fmt_const(value: float) -> str:
    """Render a constant the way it appears in a formula string (1.6, 0.035, 715)."""
    text = format(value, "g")
    if "e" in text:
        text = repr(value)
    return text


def quantity(key: str, value: float, unit: str, formula: str,
             precision: int = 3) -> FormulaResult:
    """Build a FormulaResult. title_key is filled in by the engine from the definition."""
    return FormulaResult(
        key=key,
        title_key="",
        value=finite(value),
        unit=unit,
        formula_expression=formula,
        precision=precision,
    )


# --- Field factories used across families ---

def mm(name: str, symbol: str) -> FieldSchema:
    """A millimetre input converted to metres."""
    return FieldSchema(name=name, symbol=symbol, unit="mm", divide_by=MM_PER_M)


def metres(name: str, symbol: str) -> FieldSchema:
    return FieldSchema(name=name, symbol=symbol, unit="m")


def count(name: str, symbol: str) -> FieldSchema:
    return FieldSchema(name=name, symbol=symbol, unit="nos")


def ratio(name: str, symbol: str) -> FieldSchema:
    return FieldSchema(name=name, symbol=symbol, unit="")


def diameter(name: str, symbol: str) -> FieldSchema:
    """Bar diameters stay in millimetres for the D²/162 rule."""
    return FieldSchema(name=name, symbol=symbol, unit="mm")
