"""
Calculation engine entry point.

    compute(calculator_id, raw_inputs, prices) -> CalculationOutcome

normalize -> registry formulas -> cost composer -> detail builder. Every call
is a pure function of its arguments; nothing is cached between calls.
snapshot() runs the same pipeline and freezes it into a CalculationSession
for the history collaborator.
"""

import logging
from datetime import datetime
from typing import Mapping, Optional, Tuple

from . import registry
from .costs import compose_costs
from .detail import build_detail
from .normalizer import normalize, normalize_prices, price_display
from .results import CalculationOutcome, CalculationSession, NormalizedInput

logger = logging.getLogger(__name__)


def _run(calculator_id: str, raw_inputs: Optional[Mapping[str, object]],
         prices: Optional[Mapping[str, object]], currency: Optional[str],
         precision: Optional[int]) -> Tuple[NormalizedInput, dict, CalculationOutcome]:
    definition = registry.get_calculator(calculator_id)
    inp = normalize(raw_inputs, definition.fields)
    price_map = normalize_prices(prices, definition.price_fields())
    price_text = price_display(prices, definition.price_fields())

    results = registry.compute(calculator_id, inp)
    costs = compose_costs(results, price_map, definition.cost_rules, currency=currency)
    detail = build_detail(inp, results, costs, definition, prices=price_map, precision=precision,
                          price_text=price_text)

    outcome = CalculationOutcome(
        calculator_id=calculator_id,
        quantities=results,
        costs=costs,
        detail=detail,
    )
    return inp, price_map, outcome


def compute(calculator_id: str, raw_inputs: Optional[Mapping[str, object]] = None,
            prices: Optional[Mapping[str, object]] = None, currency: Optional[str] = None,
            precision: Optional[int] = None) -> CalculationOutcome:
    """
    Run one calculator end to end.

    Raises:
        UnknownCalculatorType: calculator_id is not registered. Nothing else
        raises; bad numbers read as 0.
    """
    _, _, outcome = _run(calculator_id, raw_inputs, prices, currency, precision)
    logger.debug("Computed %s: total cost %.3f", calculator_id, outcome.total_cost)
    return outcome


def snapshot(calculator_id: str, raw_inputs: Optional[Mapping[str, object]] = None,
             prices: Optional[Mapping[str, object]] = None, currency: Optional[str] = None,
             precision: Optional[int] = None, created_at: Optional[datetime] = None) -> CalculationSession:
    """compute() frozen into a CalculationSession stamped with created_at (now by default)."""
    inp, price_map, outcome = _run(calculator_id, raw_inputs, prices, currency, precision)
    definition = registry.get_calculator(calculator_id)
    return CalculationSession(
        calculator_id=calculator_id,
        title=definition.title,
        raw_inputs={k: "" if v is None else str(v) for k, v in (raw_inputs or {}).items()},
        prices=price_map,
        normalized=inp,
        quantities=outcome.quantities,
        costs=outcome.costs,
        detail=outcome.detail,
        created_at=created_at or datetime.utcnow(),
    )
