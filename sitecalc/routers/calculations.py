"""
Calculation API: thin adapter over the engine.

GET  /api/calculators            : Registered calculators with their input and price fields
POST /api/calculate/{id}         : Run one calculator, optionally save it to history
GET  /api/history                : Saved calculations, newest first (?q= searches title/type)
GET  /api/history/{id}           : One saved calculation with its summary tables
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..calculators import engine, registry
from ..calculators.aggregator import aggregate, history_payload, summary_rows
from ..calculators.registry import UnknownCalculatorType
from ..database import get_db
from ..history import (
    HistoryNotFound, HistoryStoreError, SqlHistoryStore, save_session_safely, session_from_record,
)
from .prices import saved_prices

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculations"])


def _calculator_out(definition) -> schemas.CalculatorOut:
    return schemas.CalculatorOut(
        id=definition.id,
        title=definition.title,
        family=definition.family,
        i18n_prefix=definition.i18n_prefix,
        fields=[
            schemas.FieldOut(
                name=f.name, symbol=f.symbol, unit=f.unit, label_key=definition.input_label_key(f),
            )
            for f in definition.fields
        ],
        price_fields=definition.price_fields(),
    )


@router.get("/calculators", response_model=List[schemas.CalculatorOut])
def list_calculators(family: Optional[str] = None):
    return [
        _calculator_out(registry.get_calculator(cid))
        for cid in registry.list_calculators(family)
    ]


@router.post("/calculate/{calculator_id}", response_model=schemas.CalculateResponse)
def calculate(calculator_id: str, request: schemas.CalculateRequest, db: Session = Depends(get_db)):
    """
    Run one calculator.

    Prices missing from the request are filled from the saved price book when
    use_saved_prices is set. A history save failure is logged and the result
    is still returned, with history_id None.
    """
    prices = dict(request.prices)
    if request.use_saved_prices:
        for key, value in saved_prices(db).items():
            if prices.get(key) in (None, ""):
                prices[key] = value

    try:
        session = engine.snapshot(calculator_id, request.inputs, prices, currency=request.currency)
    except UnknownCalculatorType as e:
        raise HTTPException(status_code=404, detail=str(e))

    payload = history_payload(aggregate(session.quantities, session.costs))
    history_id = None
    if request.save:
        history_id = save_session_safely(SqlHistoryStore(db), session)

    return schemas.CalculateResponse(
        calculator_id=session.calculator_id,
        title=session.title,
        quantities=session.quantities,
        costs=session.costs,
        detail=session.detail,
        summary=summary_rows(payload),
        payload=payload,
        history_id=history_id,
    )


@router.get("/history", response_model=List[schemas.HistoryItem])
def get_calculation_history(q: Optional[str] = None, db: Session = Depends(get_db)):
    try:
        records = SqlHistoryStore(db).list_records(q)
    except HistoryStoreError as e:
        logger.warning("History listing failed: %s", e)
        raise HTTPException(status_code=503, detail="Calculation history is unavailable")
    return [
        schemas.HistoryItem(
            id=r.id,
            calculator_type=r.calculator_type,
            title=r.title,
            generated_content=r.generated_content or {},
            created_at=r.created_at,
        )
        for r in records
    ]


@router.get("/history/{history_id}", response_model=schemas.HistoryDetail)
def get_calculation_details(history_id: str, db: Session = Depends(get_db)):
    store = SqlHistoryStore(db)
    try:
        record = store.get_record(history_id)
    except HistoryNotFound:
        raise HTTPException(status_code=404, detail="Calculation not found")
    except HistoryStoreError as e:
        logger.warning("History lookup failed: %s", e)
        raise HTTPException(status_code=503, detail="Calculation history is unavailable")

    session = session_from_record(record)
    return schemas.HistoryDetail(
        id=record.id,
        calculator_type=record.calculator_type,
        title=record.title,
        generated_content=record.generated_content or {},
        created_at=record.created_at,
        inputs=session.raw_inputs,
        prices=session.prices,
        quantities=session.quantities,
        costs=session.costs,
        detail=session.detail,
        summary=summary_rows(record.generated_content),
    )
