"""
Cost Composer.

Quantity x unit price for every priced quantity, plus a total line.
A quantity with no price still gets a line, costed at 0.
"""

from typing import Iterable, List, Mapping, Optional

from ..config import settings
from .base import CostRule, finite
from .labels import title_from_key
from .results import CostLineItem, FormulaResult

TOTAL_KEY = "total_cost"


def _default_rules(results: Iterable[FormulaResult], prices: Mapping[str, float]) -> List[CostRule]:
    """Without declared rules, a price keyed by a quantity's key prices that quantity."""
    rules = []
    for result in results:
        if result.key in prices:
            key = f"{result.key}_cost"
            rules.append(CostRule(key, title_from_key(key), result.key, result.key, result.key))
    return rules


def make_line_item(rule: CostRule, result: Optional[FormulaResult],
                   prices: Mapping[str, float], currency: str) -> CostLineItem:
    """Build one CostLineItem: total_cost = quantity * unit_price, never NaN."""
    qty = result.value if result is not None else 0.0
    unit_price = finite(prices.get(rule.price_field, 0.0))
    formula = f"{rule.symbol}*({result.formula_expression})" if result is not None else f"{rule.symbol}*0"
    return CostLineItem(
        key=rule.key,
        label=rule.label,
        quantity=qty,
        unit_price=unit_price,
        total_cost=finite(qty * unit_price),
        currency=currency,
        quantity_key=rule.quantity_key,
        formula=formula,
    )


def make_total_item(items: List[CostLineItem], currency: str) -> CostLineItem:
    total = finite(sum(item.total_cost for item in items))
    formula = " + ".join(item.label for item in items) if items else "0"
    return CostLineItem(
        key=TOTAL_KEY,
        label="Total Cost",
        quantity=1.0,
        unit_price=total,
        total_cost=total,
        currency=currency,
        formula=formula,
    )


def compose_costs(results: List[FormulaResult], prices: Mapping[str, float],
                  rules: Optional[Iterable[CostRule]] = None,
                  currency: Optional[str] = None) -> List[CostLineItem]:
    """
    Combine computed quantities with unit prices.

    Args:
        results: FormulaResults from the registry
        prices: {price field: unit price}; missing prices cost 0
        rules: which quantity each price applies to (from the calculator
               definition); defaults to prices keyed by quantity key
        currency: currency code stamped on every line (settings.CURRENCY)

    Returns:
        One CostLineItem per rule, then the total line.
    """
    currency = currency or settings.CURRENCY
    by_key = {r.key: r for r in results}
    if rules is None:
        rules = _default_rules(results, prices)

    items = [make_line_item(rule, by_key.get(rule.quantity_key), prices, currency) for rule in rules]
    items.append(make_total_item(items, currency))
    return items
