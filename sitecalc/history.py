"""
Calculation history: where finished CalculationSessions are kept.

The engine never imports this module. Callers hand a session to a
HistoryStore after computing it; a failing store must never take the
computed result down with it, hence save_session_safely().
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .calculators.aggregator import aggregate, history_payload
from .calculators.results import (
    CalculationSession, CostLineItem, DetailRecord, FormulaResult, NormalizedInput,
)

logger = logging.getLogger(__name__)


class HistoryNotFound(LookupError):
    def __init__(self, history_id: str):
        self.history_id = history_id
        super().__init__(f"Calculation {history_id} not found")


class HistoryStoreError(RuntimeError):
    """The backing store failed to read or write."""


class HistoryStore(Protocol):
    def save(self, session: CalculationSession, ai_insights: Optional[Dict[str, Any]] = None) -> str: ...

    def get(self, history_id: str) -> CalculationSession: ...

    def list(self, q: Optional[str] = None) -> List[CalculationSession]: ...


def session_from_record(record: models.CalculationRecord) -> CalculationSession:
    return CalculationSession(
        calculator_id=record.calculator_type,
        title=record.title or "",
        raw_inputs=record.inputs_json or {},
        prices=record.prices_json or {},
        normalized=NormalizedInput.model_validate(record.normalized_json or {}),
        quantities=[FormulaResult.model_validate(r) for r in record.results_json or []],
        costs=[CostLineItem.model_validate(c) for c in record.costs_json or []],
        detail=DetailRecord.model_validate(record.detail_json or {}),
        created_at=record.created_at,
        history_id=record.id,
    )


class SqlHistoryStore:
    """HistoryStore on the calculation_history table."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, session: CalculationSession, ai_insights: Optional[Dict[str, Any]] = None) -> str:
        history_id = str(uuid.uuid4())
        payload = history_payload(aggregate(session.quantities, session.costs), ai_insights)
        record = models.CalculationRecord(
            id=history_id,
            calculator_type=session.calculator_id,
            title=session.title,
            inputs_json=dict(session.raw_inputs),
            prices_json=dict(session.prices),
            normalized_json=session.normalized.model_dump(mode="json"),
            results_json=[r.model_dump(mode="json") for r in session.quantities],
            costs_json=[c.model_dump(mode="json") for c in session.costs],
            detail_json=session.detail.model_dump(mode="json"),
            generated_content=payload,
            created_at=session.created_at,
        )
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise HistoryStoreError(f"Could not save {session.calculator_id} calculation: {e}") from e
        logger.info("Saved %s calculation as %s", session.calculator_id, history_id)
        return history_id

    def get_record(self, history_id: str) -> models.CalculationRecord:
        try:
            record = self.db.query(models.CalculationRecord).filter(
                models.CalculationRecord.id == history_id
            ).first()
        except SQLAlchemyError as e:
            raise HistoryStoreError(f"Could not load calculation {history_id}: {e}") from e
        if record is None:
            raise HistoryNotFound(history_id)
        return record

    def list_records(self, q: Optional[str] = None) -> List[models.CalculationRecord]:
        """Newest first. q matches title or calculator type, case-insensitive."""
        query = self.db.query(models.CalculationRecord)
        if q:
            # % and _ typed into search are literal characters
            term = q.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{term}%"
            query = query.filter(or_(
                models.CalculationRecord.title.ilike(pattern, escape="\\"),
                models.CalculationRecord.calculator_type.ilike(pattern, escape="\\"),
            ))
        try:
            return query.order_by(models.CalculationRecord.created_at.desc()).all()
        except SQLAlchemyError as e:
            raise HistoryStoreError(f"Could not list calculations: {e}") from e

    def get(self, history_id: str) -> CalculationSession:
        return session_from_record(self.get_record(history_id))

    def list(self, q: Optional[str] = None) -> List[CalculationSession]:
        return [session_from_record(r) for r in self.list_records(q)]


def save_session_safely(store: HistoryStore, session: CalculationSession,
                        ai_insights: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """Save and return the history id, or log and return None if the store fails."""
    try:
        return store.save(session, ai_insights)
    except (HistoryStoreError, SQLAlchemyError) as e:
        logger.warning("History save failed for %s: %s", session.calculator_id, e)
        return None
