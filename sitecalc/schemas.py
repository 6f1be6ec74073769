from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from .calculators.results import CostLineItem, DetailRecord, FormulaResult

RawValue = Union[str, float, int, None]

# --- Calculators ---

class FieldOut(BaseModel):
    name: str
    symbol: str
    unit: str
    label_key: str

class CalculatorOut(BaseModel):
    id: str
    title: str
    family: str
    i18n_prefix: str
    fields: List[FieldOut]
    price_fields: List[str]

class CalculateRequest(BaseModel):
    inputs: Dict[str, RawValue] = Field(default_factory=dict)
    prices: Dict[str, RawValue] = Field(default_factory=dict)
    save: bool = False
    use_saved_prices: bool = False  # fill prices the request leaves out from the price book
    currency: Optional[str] = None

class SummaryRows(BaseModel):
    materials: List[Dict[str, Any]] = Field(default_factory=list)
    work_costs: List[Dict[str, Any]] = Field(default_factory=list)

class CalculateResponse(BaseModel):
    calculator_id: str
    title: str
    quantities: List[FormulaResult]
    costs: List[CostLineItem]
    detail: DetailRecord
    summary: SummaryRows
    payload: Dict[str, Any]
    history_id: Optional[str] = None

# --- History ---

class HistoryItem(BaseModel):
    id: str
    calculator_type: str
    title: Optional[str] = None
    generated_content: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime

class HistoryDetail(HistoryItem):
    inputs: Dict[str, str] = Field(default_factory=dict)
    prices: Dict[str, float] = Field(default_factory=dict)
    quantities: List[FormulaResult] = Field(default_factory=list)
    costs: List[CostLineItem] = Field(default_factory=list)
    detail: Optional[DetailRecord] = None
    summary: SummaryRows

# --- Price book ---

class MaterialPriceBase(BaseModel):
    price_key: str
    price: float = 0.0
    unit: Optional[str] = None
    notes: Optional[str] = None

class MaterialPriceCreate(MaterialPriceBase):
    pass

class MaterialPriceUpdate(BaseModel):
    price: Optional[float] = None
    unit: Optional[str] = None
    notes: Optional[str] = None

class MaterialPrice(MaterialPriceBase):
    id: int
    updated_at: datetime
    class Config:
        from_attributes = True
