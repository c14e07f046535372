from sqlalchemy import Column, Integer, String, Float, DateTime, Enum, Boolean
from datetime import datetime
from .database import Base
from .calculators.operations import OperationFamily
from .pricing_engine import GlassPricingMethod


# --- Configuration tables consumed by the pricing core ---

class GlassType(Base):
    """Glass catalog — price per meter and how it applies (area vs. length)."""
    __tablename__ = "glass_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    thickness = Column(Float, nullable=False)  # mm
    color = Column(String, nullable=True)
    price_per_meter = Column(Float, nullable=False)
    pricing_method = Column(Enum(GlassPricingMethod), default=GlassPricingMethod.AREA, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class BevelingRate(Base):
    """One thickness tier of the edge-finishing rate table."""
    __tablename__ = "beveling_rates"

    id = Column(Integer, primary_key=True, index=True)
    beveling_type = Column(Enum(OperationFamily), nullable=False, index=True)
    min_thickness = Column(Float, nullable=False)  # mm, inclusive
    max_thickness = Column(Float, nullable=True)   # mm, inclusive; NULL = no upper bound
    rate_per_meter = Column(Float, nullable=False)  # per m² for area-based families
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
