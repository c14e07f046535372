from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging
from .. import models, schemas
from ..database import get_db
from ..providers import seed_beveling_rates
from ..rate_table import RateTable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/beveling-rates", tags=["beveling-rates"])


def _check_family_tiers(db: Session, family, candidate: models.BevelingRate):
    """
    Validate the family's active tiers with `candidate` added or replaced.
    Raises InvalidTierConfiguration (-> 409) on overlap or malformed ranges.
    """
    query = db.query(models.BevelingRate).filter(
        models.BevelingRate.beveling_type == family,
        models.BevelingRate.active.is_(True),
    )
    if candidate.id is not None:
        query = query.filter(models.BevelingRate.id != candidate.id)
    rows = query.all()
    if candidate.active:
        rows.append(candidate)
    RateTable.from_rows(rows)


@router.get("/seed")
def seed_rates(db: Session = Depends(get_db)):
    """Seed default beveling tiers. Safe to run multiple times — skips families that have rows."""
    seeded = seed_beveling_rates(db)
    return {"ok": True, "seeded": seeded}


@router.get("/", response_model=List[schemas.BevelingRate])
def list_rates(db: Session = Depends(get_db)):
    return db.query(models.BevelingRate).order_by(
        models.BevelingRate.beveling_type, models.BevelingRate.min_thickness
    ).all()


@router.post("/", response_model=schemas.BevelingRate)
def create_rate(rate: schemas.BevelingRateCreate, db: Session = Depends(get_db)):
    row = models.BevelingRate(**rate.model_dump(), active=True)
    _check_family_tiers(db, rate.beveling_type, row)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Added %s tier [%s, %s] @ %s", row.beveling_type.value,
                row.min_thickness, row.max_thickness, row.rate_per_meter)
    return row


@router.patch("/{rate_id}", response_model=schemas.BevelingRate)
def update_rate(rate_id: int, update: schemas.BevelingRateUpdate, db: Session = Depends(get_db)):
    row = db.query(models.BevelingRate).filter(models.BevelingRate.id == rate_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Beveling rate not found — run /beveling-rates/seed first")

    changes = update.model_dump(exclude_unset=True)
    candidate = models.BevelingRate(
        id=row.id,
        beveling_type=row.beveling_type,
        min_thickness=changes.get("min_thickness", row.min_thickness),
        max_thickness=changes.get("max_thickness", row.max_thickness),
        rate_per_meter=changes.get("rate_per_meter", row.rate_per_meter),
        active=changes.get("active", row.active),
    )
    _check_family_tiers(db, row.beveling_type, candidate)

    for field, value in changes.items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{rate_id}")
def delete_rate(rate_id: int, db: Session = Depends(get_db)):
    row = db.query(models.BevelingRate).filter(models.BevelingRate.id == rate_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Beveling rate not found")
    db.delete(row)
    db.commit()
    return {"ok": True, "deleted": rate_id}
