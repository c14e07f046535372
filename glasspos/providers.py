"""
Database-backed providers for the pricing core.

- Rate-configuration provider: active BevelingRate rows -> RateTable
- Glass-catalog provider: GlassType row -> GlassSpec

Rates live in the database, not in code, so each shop can override them.
DEFAULT_TIERS / DEFAULT_GLASS_TYPES only seed empty tables.
"""

import logging
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from . import models
from .calculators.operations import OperationFamily
from .calculators.units import to_decimal
from .config import settings
from .exceptions import GlassTypeNotFound
from .pricing_engine import GlassPricingMethod
from .rate_table import BoundaryPolicy, RateTable

logger = logging.getLogger(__name__)


def _banded(base: float) -> list:
    """
    Three thickness bands: up to 6 mm, up to 10 mm, thicker.
    Bands step by 0.01 mm, the precision glass thickness is stored at
    (schemas.GlassTypeBase), so every stored thickness falls in a band.
    """
    return [
        {"min_thickness": 0.0, "max_thickness": 6.0, "rate_per_meter": base},
        {"min_thickness": 6.01, "max_thickness": 10.0, "rate_per_meter": round(base * 1.25, 2)},
        {"min_thickness": 10.01, "max_thickness": None, "rate_per_meter": round(base * 1.5, 2)},
    ]


# Default rates per linear meter (per m² for sanding), EGP
DEFAULT_TIERS = {
    OperationFamily.KHARZAN: _banded(12.0),
    OperationFamily.CHAMBOURLIEH: _banded(15.0),
    OperationFamily.BEVEL_1_CM: _banded(8.0),
    OperationFamily.BEVEL_2_CM: _banded(10.0),
    OperationFamily.BEVEL_3_CM: _banded(12.0),
    OperationFamily.JULIA: _banded(18.0),
    OperationFamily.SANDING: _banded(20.0),
}

DEFAULT_GLASS_TYPES = [
    {"name": "Clear float 4mm", "thickness": 4.0, "color": "clear", "price_per_meter": 180.0,
     "pricing_method": GlassPricingMethod.AREA},
    {"name": "Clear float 6mm", "thickness": 6.0, "color": "clear", "price_per_meter": 260.0,
     "pricing_method": GlassPricingMethod.AREA},
    {"name": "Clear float 10mm", "thickness": 10.0, "color": "clear", "price_per_meter": 450.0,
     "pricing_method": GlassPricingMethod.AREA},
    {"name": "Bronze reflective 6mm", "thickness": 6.0, "color": "bronze", "price_per_meter": 320.0,
     "pricing_method": GlassPricingMethod.AREA},
    {"name": "Mirror strip 4mm", "thickness": 4.0, "color": "silver", "price_per_meter": 60.0,
     "pricing_method": GlassPricingMethod.LENGTH},
]


class GlassSpec(BaseModel):
    """What the pricing engine needs to know about one glass type."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    thickness_mm: Decimal
    price_per_meter: Decimal
    pricing_method: GlassPricingMethod


def load_rate_table(db: Session, policy=None) -> RateTable:
    """Snapshot all active beveling tiers into an immutable RateTable."""
    rows = db.query(models.BevelingRate).filter(models.BevelingRate.active.is_(True)).all()
    policy = BoundaryPolicy.parse(policy or settings.RATE_BOUNDARY_POLICY)
    table = RateTable.from_rows(rows, policy=policy)
    logger.debug("Loaded %d beveling tiers: %r", len(rows), table)
    return table


def get_glass_type(db: Session, glass_type_id: int) -> GlassSpec:
    glass = db.query(models.GlassType).filter(models.GlassType.id == glass_type_id).first()
    if not glass or not glass.active:
        raise GlassTypeNotFound(glass_type_id)
    return GlassSpec(
        id=glass.id,
        name=glass.name,
        thickness_mm=to_decimal(glass.thickness, "thickness"),
        price_per_meter=to_decimal(glass.price_per_meter, "price_per_meter"),
        pricing_method=glass.pricing_method or GlassPricingMethod.AREA,
    )


def seed_beveling_rates(db: Session) -> int:
    """Insert DEFAULT_TIERS for families with no rows yet. Safe to run repeatedly."""
    seeded = 0
    for family, tiers in DEFAULT_TIERS.items():
        existing = db.query(models.BevelingRate).filter(
            models.BevelingRate.beveling_type == family
        ).first()
        if existing:
            continue
        for tier in tiers:
            db.add(models.BevelingRate(beveling_type=family, **tier))
            seeded += 1
    db.commit()
    return seeded


def seed_glass_types(db: Session) -> int:
    """Insert DEFAULT_GLASS_TYPES missing by name."""
    seeded = 0
    for data in DEFAULT_GLASS_TYPES:
        existing = db.query(models.GlassType).filter(models.GlassType.name == data["name"]).first()
        if not existing:
            db.add(models.GlassType(**data))
            seeded += 1
    db.commit()
    return seeded
