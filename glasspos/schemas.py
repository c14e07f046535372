from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from decimal import Decimal
from datetime import datetime
from .calculators.operations import OperationFamily
from .pricing_engine import GlassPricingMethod, LineBreakdown
from .invoice_aggregator import InvoiceTotals, PaymentSummary


# --- Glass catalog ---

def _check_hundredths(value):
    """Thickness is stored to 0.01 mm, the step between seeded rate tiers."""
    if value is not None and round(value, 2) != value:
        raise ValueError("thickness must have at most 2 decimal places")
    return value


class GlassTypeBase(BaseModel):
    name: str
    thickness: float = Field(gt=0)
    color: Optional[str] = None
    price_per_meter: float = Field(ge=0)
    pricing_method: GlassPricingMethod = GlassPricingMethod.AREA

    check_thickness = field_validator("thickness")(_check_hundredths)

class GlassTypeCreate(GlassTypeBase):
    pass

class GlassTypeUpdate(BaseModel):
    name: Optional[str] = None
    thickness: Optional[float] = Field(default=None, gt=0)
    color: Optional[str] = None
    price_per_meter: Optional[float] = Field(default=None, ge=0)
    pricing_method: Optional[GlassPricingMethod] = None
    active: Optional[bool] = None

    check_thickness = field_validator("thickness")(_check_hundredths)

class GlassType(GlassTypeBase):
    id: int
    active: bool
    updated_at: Optional[datetime] = None
    class Config:
        from_attributes = True


# --- Beveling rate tiers ---

class BevelingRateBase(BaseModel):
    beveling_type: OperationFamily
    min_thickness: float = Field(ge=0)
    max_thickness: Optional[float] = Field(default=None, ge=0)
    rate_per_meter: float = Field(ge=0)

class BevelingRateCreate(BevelingRateBase):
    pass

class BevelingRateUpdate(BaseModel):
    min_thickness: Optional[float] = Field(default=None, ge=0)
    max_thickness: Optional[float] = Field(default=None, ge=0)
    rate_per_meter: Optional[float] = Field(default=None, ge=0)
    active: Optional[bool] = None

class BevelingRate(BevelingRateBase):
    id: int
    active: bool
    updated_at: Optional[datetime] = None
    class Config:
        from_attributes = True


# --- Calculations ---

class OperationRequest(BaseModel):
    family: str = OperationFamily.KHARZAN.value
    operation_code: Optional[str] = None  # not needed for LASER / SANDING
    manual_meters: Optional[Decimal] = None
    manual_price: Optional[Decimal] = None

class LineRequest(BaseModel):
    glass_type_id: int
    operations: List[OperationRequest] = []  # empty = plain glass
    width: Decimal
    height: Decimal
    diameter: Optional[Decimal] = None
    unit: Optional[str] = None  # falls back to settings.DEFAULT_DIMENSION_UNIT
    quantity: int = 1
    notes: Optional[str] = None

class LineResult(BaseModel):
    glass_type_id: int
    glass_type_name: str
    thickness_mm: Decimal
    breakdown: LineBreakdown

class InvoiceRequest(BaseModel):
    lines: List[LineRequest] = Field(min_length=1)
    amount_paid: Decimal = Decimal(0)

class InvoiceResult(BaseModel):
    currency: str
    lines: List[LineResult]
    totals: InvoiceTotals
    payment: PaymentSummary
