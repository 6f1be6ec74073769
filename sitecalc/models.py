from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON
from datetime import datetime
from .database import Base


class CalculationRecord(Base):
    """One finished calculation, frozen at "Calculate"."""
    __tablename__ = "calculation_history"

    id = Column(String, primary_key=True)  # UUID
    calculator_type = Column(String, nullable=False, index=True)
    title = Column(String, nullable=True)
    inputs_json = Column(JSON, default=dict)  # Raw form text as typed
    prices_json = Column(JSON, default=dict)  # Unit prices actually used
    normalized_json = Column(JSON, default=dict)  # NormalizedInput
    results_json = Column(JSON, default=list)  # FormulaResult[]
    costs_json = Column(JSON, default=list)  # CostLineItem[]
    detail_json = Column(JSON, default=dict)  # DetailRecord
    generated_content = Column(JSON, default=dict)  # {"calculation": {...}, "ai_insights": {...}}
    created_at = Column(DateTime, default=datetime.utcnow, index=True)


class MaterialPrice(Base):
    """Saved unit-price book, keyed by the price field a calculator declares."""
    __tablename__ = "material_prices"

    id = Column(Integer, primary_key=True, index=True)
    price_key = Column(String, unique=True, nullable=False)  # 'cement_price' | 'sand_price' | ...
    price = Column(Float, nullable=False, default=0.0)
    unit = Column(String, nullable=True)  # 'per bag' | 'per m3' | ...
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    notes = Column(Text)
