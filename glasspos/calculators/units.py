"""
Dimension units and the single, central conversion to meters.

Raw UI input arrives in mm, cm or m. Every formula runs on meters, so the
conversion happens once here and nowhere else. Decimal arithmetic keeps the
conversion exact: 1000 mm -> 1 m -> 1000 mm round-trips without drift.
"""

import enum
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..exceptions import InvalidDimensions


class DimensionUnit(str, enum.Enum):
    MM = "MM"
    CM = "CM"
    M = "M"

    @classmethod
    def parse(cls, value) -> "DimensionUnit":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidDimensions("unit", value, reason="is not one of MM, CM, M") from None


# Divide raw values by these to get meters
UNIT_DIVISORS = {
    DimensionUnit.MM: Decimal(1000),
    DimensionUnit.CM: Decimal(100),
    DimensionUnit.M: Decimal(1),
}


def to_decimal(value, field: str = "value") -> Decimal:
    """
    Coerce a numeric input to Decimal without picking up binary float noise.
    Floats go through repr() so 0.1 becomes Decimal('0.1'), not 0.1000000000000000055...
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise InvalidDimensions(field, value, reason="is not a number")
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidDimensions(field, value, reason="is not a number") from None
    if not result.is_finite():
        raise InvalidDimensions(field, value, reason="is not a finite number")
    return result


def to_meters(value, unit) -> Decimal:
    """Convert a raw length in `unit` to meters."""
    return to_decimal(value) / UNIT_DIVISORS[DimensionUnit.parse(unit)]


def from_meters(value_m, unit) -> Decimal:
    """Convert meters back to `unit`. Exact inverse of to_meters()."""
    return to_decimal(value_m) * UNIT_DIVISORS[DimensionUnit.parse(unit)]


class Dimensions(BaseModel):
    """Width, height and optional diameter of one glass piece, in a single unit."""

    model_config = ConfigDict(frozen=True)

    width: Decimal
    height: Decimal
    diameter: Optional[Decimal] = None

    @classmethod
    def of(cls, width, height, diameter=None) -> "Dimensions":
        """Build from raw numbers (int, float, str or Decimal)."""
        return cls(
            width=to_decimal(width, "width"),
            height=to_decimal(height, "height"),
            diameter=None if diameter is None else to_decimal(diameter, "diameter"),
        )

    def to_meters(self, unit) -> "Dimensions":
        unit = DimensionUnit.parse(unit)
        return Dimensions(
            width=to_meters(self.width, unit),
            height=to_meters(self.height, unit),
            diameter=None if self.diameter is None else to_meters(self.diameter, unit),
        )

    @property
    def area(self) -> Decimal:
        return self.width * self.height

    @property
    def longest_side(self) -> Decimal:
        return max(self.width, self.height)
