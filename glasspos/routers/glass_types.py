from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging
from .. import models, schemas
from ..database import get_db
from ..providers import seed_glass_types

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/glass-types", tags=["glass-types"])


@router.get("/seed")
def seed_types(db: Session = Depends(get_db)):
    """Seed default glass types."""
    seeded = seed_glass_types(db)
    return {"ok": True, "seeded": seeded}


@router.get("/", response_model=List[schemas.GlassType])
def list_glass_types(include_inactive: bool = False, db: Session = Depends(get_db)):
    query = db.query(models.GlassType)
    if not include_inactive:
        query = query.filter(models.GlassType.active.is_(True))
    return query.order_by(models.GlassType.name).all()


@router.post("/", response_model=schemas.GlassType)
def create_glass_type(glass: schemas.GlassTypeCreate, db: Session = Depends(get_db)):
    row = models.GlassType(**glass.model_dump(), active=True)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Added glass type %s (%s mm, %s)", row.name, row.thickness, row.pricing_method.value)
    return row


@router.patch("/{glass_type_id}", response_model=schemas.GlassType)
def update_glass_type(glass_type_id: int, update: schemas.GlassTypeUpdate, db: Session = Depends(get_db)):
    glass = db.query(models.GlassType).filter(models.GlassType.id == glass_type_id).first()
    if not glass:
        raise HTTPException(status_code=404, detail="Glass type not found — run /glass-types/seed first")
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(glass, field, value)
    db.commit()
    db.refresh(glass)
    return glass
