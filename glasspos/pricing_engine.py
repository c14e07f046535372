"""
Line pricing engine.

Combines glass pricing with edge-finishing pricing into one LineBreakdown.
Pure math — no I/O. Dimensions × rate, meters × tier rate.

Input: dimensions (raw unit) + glass rate + pricing method + zero or more operations
Output: LineBreakdown (immutable)
"""

import enum
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .calculators.operations import OperationCode, OperationFamily, describe_operation
from .calculators.registry import FORMULA_REGISTRY
from .calculators.units import Dimensions, DimensionUnit, to_decimal
from .exceptions import InvalidDimensions, ManualInputRequired, MissingDiameter
from .rate_table import RateTable

CENT = Decimal("0.01")
ZERO = Decimal(0)


def round_money(value) -> Decimal:
    """Round half-up to 2 decimal places (currency convention)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class GlassPricingMethod(str, enum.Enum):
    AREA = "AREA"      # price per m²
    LENGTH = "LENGTH"  # price per linear meter of the longest side


class ManualOverride(BaseModel):
    """Operator-supplied edge meterage or finished price for manual work."""

    model_config = ConfigDict(frozen=True)

    meters: Optional[Decimal] = None
    price: Optional[Decimal] = None

    def check(self) -> "ManualOverride":
        for field in ("meters", "price"):
            value = getattr(self, field)
            if value is not None and value < 0:
                raise InvalidDimensions(f"manual_{field}", value, reason="must not be negative")
        return self


class LineOperation(BaseModel):
    """One edge-finishing operation requested on a glass line."""

    model_config = ConfigDict(frozen=True)

    family: OperationFamily
    code: Optional[OperationCode] = None  # laser and sanding work need no code
    manual_override: Optional[ManualOverride] = None

    @classmethod
    def of(cls, family, code=None, manual_override: ManualOverride = None) -> "LineOperation":
        """Resolve family and code strings (legacy aliases included)."""
        return cls(
            family=OperationFamily.parse(family),
            code=OperationCode.parse(code) if code not in (None, "") else None,
            manual_override=manual_override,
        )


class OperationBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: OperationFamily
    operation_code: Optional[OperationCode] = None
    finishing_meters: Decimal = ZERO  # edge meters; 0 for area-based and laser work
    rate: Optional[Decimal] = None    # per meter, per m² for area-based families
    cutting_price: Decimal
    cutting_amount: Decimal


class LineBreakdown(BaseModel):
    """
    Priced result for one invoice line. Never mutated after creation.

    glass_price and cutting_price are rounded per piece, and line_total is
    (glass_price + cutting_price) × quantity, so a printed line always adds up.
    glass_amount / cutting_amount keep full precision for the invoice sums.
    """

    model_config = ConfigDict(frozen=True)

    quantity: int = 1
    area_m2: Decimal
    length_m: Decimal
    operations: Tuple[OperationBreakdown, ...] = ()
    finishing_meters: Decimal
    glass_price: Decimal
    cutting_price: Decimal
    line_total: Decimal
    glass_amount: Decimal
    cutting_amount: Decimal


class CalculationEngine:
    """
    Prices invoice lines against an injected, immutable RateTable.
    Safe to share across threads — holds no mutable state.
    """

    def __init__(self, rate_table: RateTable, formulas: dict = None):
        self.rate_table = rate_table
        self.formulas = formulas if formulas is not None else FORMULA_REGISTRY

    def compute_line(self, operation_code, dimensions: Dimensions, unit, glass_rate,
                     pricing_method, manual_override: ManualOverride = None, *,
                     family, thickness_mm, quantity: int = 1) -> LineBreakdown:
        """
        Price a line carrying a single operation.

        Args:
            operation_code: OperationCode (or canonical / legacy code string)
            dimensions: raw width/height/diameter in `unit`
            unit: DimensionUnit tag for `dimensions`
            glass_rate: currency per m² (AREA) or per linear meter (LENGTH)
            pricing_method: GlassPricingMethod of the glass type
            manual_override: meters or price for manual operations
            family: OperationFamily keying the rate table
            thickness_mm: glass thickness used for the tier lookup
            quantity: identical pieces on this line

        Returns:
            LineBreakdown

        Raises:
            UnknownOperation, InvalidDimensions, MissingDiameter,
            RateNotFound, ManualInputRequired
        """
        operation = LineOperation.of(family, operation_code, manual_override)
        return self.price_line(dimensions, unit, glass_rate, pricing_method, [operation],
                               thickness_mm=thickness_mm, quantity=quantity)

    def price_line(self, dimensions: Dimensions, unit, glass_rate, pricing_method,
                   operations=(), *, thickness_mm, quantity: int = 1) -> LineBreakdown:
        """
        Price a glass line with any number of operations. No operations = plain glass.
        Every input is validated before the first rate lookup.
        """
        operations = tuple(operations)
        method = self._parse_pricing_method(pricing_method)

        dims_m = dimensions.to_meters(DimensionUnit.parse(unit))
        self._validate(operations, dims_m, quantity)
        glass_rate = to_decimal(glass_rate, "glass_rate")
        if glass_rate < 0:
            raise InvalidDimensions("glass_rate", glass_rate, reason="must not be negative")

        area = dims_m.area
        length = dims_m.longest_side
        glass_amount = self._calculate_glass_amount(method, area, length, glass_rate)

        priced = tuple(self._price_operation(op, dims_m, thickness_mm) for op in operations)
        cutting_amount = sum((op.cutting_amount for op in priced), ZERO)

        glass_price = round_money(glass_amount)
        cutting_price = round_money(cutting_amount)
        return LineBreakdown(
            quantity=quantity,
            area_m2=area,
            length_m=length,
            operations=priced,
            finishing_meters=sum((op.finishing_meters for op in priced), ZERO),
            glass_price=glass_price,
            cutting_price=cutting_price,
            line_total=round_money((glass_price + cutting_price) * quantity),
            glass_amount=glass_amount,
            cutting_amount=cutting_amount,
        )

    def describe_operation(self, operation_code):
        return describe_operation(operation_code)

    # --- Steps ---

    def _parse_pricing_method(self, pricing_method) -> GlassPricingMethod:
        if isinstance(pricing_method, GlassPricingMethod):
            return pricing_method
        try:
            return GlassPricingMethod(str(pricing_method).strip().upper())
        except ValueError:
            raise InvalidDimensions("pricing_method", pricing_method, reason="is not AREA or LENGTH") from None

    @staticmethod
    def _is_manual_work(op: LineOperation) -> bool:
        """Laser work, or a manual code (curve/arch, panels) on a formula family."""
        config = op.family.config
        if config.manual_input:
            return True
        return config.formula_based and op.code is not None and describe_operation(op.code).is_manual

    def _validate(self, operations, dims_m: Dimensions, quantity) -> None:
        """
        Width/height > 0 unless every operation is manual work (then >= 0).
        Diameter > 0 only for circular work on a formula family.
        """
        manual_only = bool(operations) and all(self._is_manual_work(op) for op in operations)
        for field in ("width", "height"):
            value = getattr(dims_m, field)
            if manual_only:
                if value < 0:
                    raise InvalidDimensions(field, value, reason="must not be negative")
            elif value <= 0:
                raise InvalidDimensions(field, value)

        for op in operations:
            override = (op.manual_override or ManualOverride()).check()
            config = op.family.config
            if config.manual_input:
                if override.price is None:
                    raise ManualInputRequired(op.family)
            elif config.formula_based:
                if op.code is None:
                    raise InvalidDimensions("operation_code", None,
                                            reason=f"is required for {op.family.value} work")
                descriptor = describe_operation(op.code)
                if descriptor.is_manual and override.price is None and override.meters is None:
                    raise ManualInputRequired(op.code)
                if descriptor.requires_diameter and (dims_m.diameter is None or dims_m.diameter <= 0):
                    raise MissingDiameter(dims_m.diameter)

        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidDimensions("quantity", quantity, reason="must be a whole number >= 1")

    def _calculate_glass_amount(self, method, area, length, glass_rate) -> Decimal:
        """AREA: m² × rate. LENGTH: longest side × rate."""
        if method is GlassPricingMethod.LENGTH:
            return length * glass_rate
        return area * glass_rate

    def _price_operation(self, op: LineOperation, dims_m: Dimensions, thickness_mm) -> OperationBreakdown:
        """
        Decision tree, family first:
            manual family (laser)   -> operator price
            area-based (sanding)    -> area × tier rate, operation code ignored
            manual code             -> operator price, else operator meters × tier rate
            formula code            -> formula meters × tier rate
        """
        override = op.manual_override or ManualOverride()
        config = op.family.config
        meters, rate = ZERO, None

        if config.manual_input:
            meters, amount = override.meters or ZERO, override.price
        elif config.area_based:
            rate = self.rate_table.rate_for(op.family, thickness_mm)
            amount = dims_m.area * rate
        elif describe_operation(op.code).is_manual and override.price is not None:
            meters, amount = override.meters or ZERO, override.price
        elif describe_operation(op.code).is_manual:
            rate = self.rate_table.rate_for(op.family, thickness_mm)
            meters = override.meters
            amount = meters * rate
        else:
            meters = to_decimal(self.formulas[op.code](dims_m.width, dims_m.height, dims_m.diameter))
            rate = self.rate_table.rate_for(op.family, thickness_mm)
            amount = meters * rate

        return OperationBreakdown(
            family=op.family,
            operation_code=op.code,
            finishing_meters=meters,
            rate=rate,
            cutting_price=round_money(amount),
            cutting_amount=amount,
        )


def compute_line(rate_table: RateTable, operation_code, dimensions: Dimensions, unit, glass_rate,
                 pricing_method, manual_override: ManualOverride = None, **kwargs) -> LineBreakdown:
    """Convenience wrapper for one-off calls with an explicit RateTable."""
    return CalculationEngine(rate_table).compute_line(
        operation_code, dimensions, unit, glass_rate, pricing_method, manual_override, **kwargs,
    )


def price_line(rate_table: RateTable, dimensions: Dimensions, unit, glass_rate, pricing_method,
               operations=(), **kwargs) -> LineBreakdown:
    return CalculationEngine(rate_table).price_line(
        dimensions, unit, glass_rate, pricing_method, operations, **kwargs,
    )
