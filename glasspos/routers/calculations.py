"""
Calculation preview endpoints.

Loads the glass type and the beveling tiers from the database, then hands
everything to the pure pricing core. Nothing is persisted here.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from .. import schemas
from ..calculators.units import Dimensions
from ..config import settings
from ..database import get_db
from ..exceptions import GlassPOSError
from ..invoice_aggregator import InvoiceAggregator
from ..pricing_engine import CalculationEngine, LineOperation, ManualOverride
from ..providers import get_glass_type, load_rate_table

router = APIRouter(prefix="/calculations", tags=["calculations"])


def get_engine(db: Session = Depends(get_db)) -> CalculationEngine:
    """Fresh engine over a snapshot of the current rate configuration."""
    return CalculationEngine(load_rate_table(db))


def _manual_override(op: schemas.OperationRequest):
    if op.manual_meters is None and op.manual_price is None:
        return None
    return ManualOverride(meters=op.manual_meters, price=op.manual_price)


def price_line(engine: CalculationEngine, db: Session, line: schemas.LineRequest) -> schemas.LineResult:
    glass = get_glass_type(db, line.glass_type_id)

    operations = [
        LineOperation.of(op.family, op.operation_code, _manual_override(op))
        for op in line.operations
    ]
    breakdown = engine.price_line(
        Dimensions(width=line.width, height=line.height, diameter=line.diameter),
        line.unit or settings.DEFAULT_DIMENSION_UNIT,
        glass.price_per_meter,
        glass.pricing_method,
        operations,
        thickness_mm=glass.thickness_mm,
        quantity=line.quantity,
    )
    return schemas.LineResult(
        glass_type_id=glass.id,
        glass_type_name=glass.name,
        thickness_mm=glass.thickness_mm,
        breakdown=breakdown,
    )


@router.post("/line", response_model=schemas.LineResult)
def preview_line(line: schemas.LineRequest,
                 engine: CalculationEngine = Depends(get_engine),
                 db: Session = Depends(get_db)):
    return price_line(engine, db, line)


@router.post("/invoice", response_model=schemas.InvoiceResult)
def preview_invoice(invoice: schemas.InvoiceRequest,
                    engine: CalculationEngine = Depends(get_engine),
                    db: Session = Depends(get_db)):
    """
    Price every line, then derive invoice totals and the payment summary.
    Errors carry the 1-based line number in their context.
    """
    results = []
    for index, line in enumerate(invoice.lines, start=1):
        try:
            results.append(price_line(engine, db, line))
        except GlassPOSError as e:
            e.context["line"] = index
            raise

    aggregator = InvoiceAggregator()
    totals = aggregator.compute_totals(r.breakdown for r in results)
    return schemas.InvoiceResult(
        currency=settings.CURRENCY,
        lines=results,
        totals=totals,
        payment=aggregator.summarize_payment(totals, invoice.amount_paid),
    )
