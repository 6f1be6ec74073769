"""
Result Aggregator: quantities and costs flattened into the stored history shape:

    {
      "calculation": {
        "material_quantity": {"cement_bags_nos": 0.94, "sand_volume": 0.197},
        "work_cost_breakdown": {"cement_cost_inr": 376.163, "total_cost_inr": 672.392}
      },
      "ai_insights": {}
    }

Keys carry a unit token where the unit has one so that the summary table can
derive "Cement Bags" / "Nos" back out of them.
"""

from typing import Any, Dict, List, Mapping, Optional

from ..config import settings
from .labels import cost_storage_key, derive_label, storage_key, unit_from_key
from .results import CostLineItem, FormulaResult

MATERIAL_QUANTITY = "material_quantity"
WORK_COST_BREAKDOWN = "work_cost_breakdown"


def aggregate(results: List[FormulaResult], costs: List[CostLineItem],
              precision: Optional[int] = None) -> Dict[str, Dict[str, float]]:
    """Quantities keep their own declared precision; costs use the display precision."""
    if precision is None:
        precision = settings.DISPLAY_PRECISION
    material_quantity = {
        storage_key(r.key, r.unit): round(r.value, r.precision) for r in results
    }
    work_cost_breakdown = {
        cost_storage_key(item.key, item.currency): round(item.total_cost, precision) for item in costs
    }
    return {
        MATERIAL_QUANTITY: material_quantity,
        WORK_COST_BREAKDOWN: work_cost_breakdown,
    }


def history_payload(aggregated: Mapping[str, Dict[str, float]],
                    ai_insights: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Wrap an aggregate in the stored shape. ai_insights is passed through untouched."""
    return {
        "calculation": {
            MATERIAL_QUANTITY: dict(aggregated.get(MATERIAL_QUANTITY, {})),
            WORK_COST_BREAKDOWN: dict(aggregated.get(WORK_COST_BREAKDOWN, {})),
        },
        "ai_insights": ai_insights or {},
    }


def summary_rows(payload: Optional[Mapping[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Summary tables for a stored payload.

    Works from keys alone so it also reads history written by older clients.
    A payload without a calculation section gives empty tables.
    """
    calculation = (payload or {}).get("calculation") or {}
    materials = [
        {"material": derive_label(key), "quantity": value, "unit": unit_from_key(key)}
        for key, value in (calculation.get(MATERIAL_QUANTITY) or {}).items()
    ]
    work_costs = [
        {"work": derive_label(key), "amount": value}
        for key, value in (calculation.get(WORK_COST_BREAKDOWN) or {}).items()
    ]
    return {"materials": materials, "work_costs": work_costs}
