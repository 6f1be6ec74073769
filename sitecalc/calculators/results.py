"""
Value types passed between the engine stages.

raw inputs -> NormalizedInput -> FormulaResult[] -> CostLineItem[]
           -> DetailRecord -> CalculationOutcome / CalculationSession

All types are frozen pydantic models so a finished calculation can be handed
to history persistence without being mutated afterwards.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class NormalizedInput(BaseModel):
    """Parsed field values in canonical units, plus the raw text the user typed."""
    values: Dict[str, float] = Field(default_factory=dict)
    display: Dict[str, str] = Field(default_factory=dict)

    class Config:
        frozen = True

    def get(self, name: str, default: float = 0.0) -> float:
        return self.values.get(name, default)

    def __getitem__(self, name: str) -> float:
        # Unknown fields read as 0, same as an empty box on the form
        return self.values.get(name, 0.0)


class FormulaResult(BaseModel):
    key: str
    title_key: str
    value: float
    unit: str
    formula_expression: str
    precision: int = 3

    class Config:
        frozen = True


class CostLineItem(BaseModel):
    key: str
    label: str
    quantity: float
    unit_price: float
    total_cost: float
    currency: str
    quantity_key: Optional[str] = None
    formula: str = ""

    class Config:
        frozen = True


class InputRow(BaseModel):
    label_key: str
    symbol: str
    value_text: str

    class Config:
        frozen = True


class OutputRow(BaseModel):
    title_key: str
    formula: str
    value_text: str

    class Config:
        frozen = True


class DetailRecord(BaseModel):
    inputs: List[InputRow] = Field(default_factory=list)
    outputs: List[OutputRow] = Field(default_factory=list)

    class Config:
        frozen = True


class CalculationOutcome(BaseModel):
    """What compute() hands back for one calculator run."""
    calculator_id: str
    quantities: List[FormulaResult]
    costs: List[CostLineItem]
    detail: DetailRecord

    class Config:
        frozen = True

    @property
    def total_cost(self) -> float:
        for item in self.costs:
            if item.key == "total_cost":
                return item.total_cost
        return 0.0


class CalculationSession(BaseModel):
    """Snapshot frozen at "Calculate", handed to the history collaborator."""
    calculator_id: str
    title: str = ""
    raw_inputs: Dict[str, str] = Field(default_factory=dict)
    prices: Dict[str, float] = Field(default_factory=dict)
    normalized: NormalizedInput
    quantities: List[FormulaResult]
    costs: List[CostLineItem]
    detail: DetailRecord
    created_at: datetime
    history_id: Optional[str] = None

    class Config:
        frozen = True
