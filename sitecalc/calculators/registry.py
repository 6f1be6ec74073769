"""
Calculator registry: maps calculator ids to their definitions.

Built once at import time from each family module and never mutated
afterwards, so concurrent callers can share it freely.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping

from . import concrete, masonry, plaster, steel
from .base import CalculatorDefinition
from .results import FormulaResult, NormalizedInput

logger = logging.getLogger(__name__)

FAMILIES = (masonry, plaster, concrete, steel)


class UnknownCalculatorType(LookupError):
    """Raised when a calculator id is not registered."""

    def __init__(self, calculator_id: str, available: List[str]):
        self.calculator_id = calculator_id
        self.available = available
        super().__init__(
            f"No calculator registered for type: {calculator_id}. "
            f"Available: {available}"
        )


def _build_registry() -> Mapping[str, CalculatorDefinition]:
    table: Dict[str, CalculatorDefinition] = {}
    for family in FAMILIES:
        for definition in family.definitions():
            if definition.id in table:
                raise ValueError(f"Duplicate calculator id: {definition.id}")
            table[definition.id] = definition
    return MappingProxyType(table)


CALCULATOR_REGISTRY: Mapping[str, CalculatorDefinition] = _build_registry()


def get_calculator(calculator_id: str) -> CalculatorDefinition:
    """Returns the definition for a calculator id, or raises UnknownCalculatorType."""
    try:
        return CALCULATOR_REGISTRY[calculator_id]
    except (KeyError, TypeError):
        raise UnknownCalculatorType(calculator_id, list_calculators()) from None


def has_calculator(calculator_id: str) -> bool:
    """Check if a calculator exists for an id."""
    return calculator_id in CALCULATOR_REGISTRY


def list_calculators(family: str = None) -> List[str]:
    """List registered calculator ids, optionally for one family."""
    return [
        cid for cid, definition in CALCULATOR_REGISTRY.items()
        if family is None or definition.family == family
    ]


def compute(calculator_id: str, inp: NormalizedInput) -> List[FormulaResult]:
    """
    Run one calculator's formulas over an already-normalized input.

    Results come back with their translated-title keys filled in from the
    calculator definition.
    """
    definition = get_calculator(calculator_id)
    results = definition.compute_fn(inp, definition.constants)
    logger.debug("Calculator %s produced %d results", calculator_id, len(results))
    return [
        r if r.title_key else r.model_copy(update={"title_key": definition.result_title_key(r.key)})
        for r in results
    ]
