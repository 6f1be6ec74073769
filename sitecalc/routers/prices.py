from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Dict, List
from .. import models, schemas
from ..database import get_db

router = APIRouter(prefix="/prices", tags=["prices"])

# Default unit prices (INR) keyed by the price field calculators declare. Update via API as rates change
DEFAULT_PRICES = {
    "brick_price": {"price": 10.0, "unit": "per brick", "notes": "Clay brick; AAC blocks are usually 50-60"},
    "cement_price": {"price": 400.0, "unit": "per 50 kg bag", "notes": "OPC 53 grade"},
    "material_price": {"price": 350.0, "unit": "per 25 kg bag", "notes": "Gypsum plaster"},
    "sand_price": {"price": 1500.0, "unit": "per m3", "notes": "River sand"},
    "aggregate_price": {"price": 1200.0, "unit": "per m3", "notes": "20 mm coarse aggregate"},
    "steel_price": {"price": 65.0, "unit": "per kg", "notes": "Fe 500 TMT bars"},
}


def seed_defaults(db: Session) -> int:
    """Insert any default price that is not in the book yet. Returns how many were added."""
    added = 0
    for price_key, price_data in DEFAULT_PRICES.items():
        existing = db.query(models.MaterialPrice).filter(models.MaterialPrice.price_key == price_key).first()
        if not existing:
            db.add(models.MaterialPrice(price_key=price_key, **price_data))
            added += 1
    db.commit()
    return added


def saved_prices(db: Session) -> Dict[str, float]:
    return {p.price_key: p.price for p in db.query(models.MaterialPrice).all()}


@router.post("/seed")
def seed_prices(db: Session = Depends(get_db)):
    """Seed default unit prices."""
    added = seed_defaults(db)
    return {"ok": True, "seeded": added}

@router.get("/", response_model=List[schemas.MaterialPrice])
def list_prices(db: Session = Depends(get_db)):
    return db.query(models.MaterialPrice).order_by(models.MaterialPrice.price_key).all()

@router.patch("/{price_key}", response_model=schemas.MaterialPrice)
def update_price(price_key: str, update: schemas.MaterialPriceUpdate, db: Session = Depends(get_db)):
    price = db.query(models.MaterialPrice).filter(models.MaterialPrice.price_key == price_key).first()
    if not price:
        raise HTTPException(status_code=404, detail="Price not found, run /prices/seed first")
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(price, field, value)
    db.commit()
    db.refresh(price)
    return price
