"""
Thickness-tiered rate table.

Maps (operation family, glass thickness in mm) to a rate per linear meter
(or per m² for area-based families such as sanding). Built once from a list
of ThicknessTier per family and read-only afterwards.

Tier rules:
- ranges are closed: [min_mm, max_mm], with min_mm < max_mm
- tiers of one family may not overlap, touching endpoints included
- gaps between tiers are allowed
- only the last tier may be unbounded above (max_mm = None)

Out-of-range thickness follows the table's BoundaryPolicy:
- FAIL     raise RateNotFound
- NEAREST  use the closest tier (ties go to the lower tier)
"""

import enum
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .calculators.operations import OperationFamily
from .calculators.units import to_decimal
from .exceptions import InvalidTierConfiguration, RateNotFound


class BoundaryPolicy(str, enum.Enum):
    FAIL = "fail"
    NEAREST = "nearest"

    @classmethod
    def parse(cls, value) -> "BoundaryPolicy":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class ThicknessTier(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_mm: Decimal
    max_mm: Optional[Decimal] = None
    rate_per_meter: Decimal

    def contains(self, thickness_mm: Decimal) -> bool:
        if thickness_mm < self.min_mm:
            return False
        return self.max_mm is None or thickness_mm <= self.max_mm

    def distance(self, thickness_mm: Decimal) -> Decimal:
        """How far a thickness lies outside this tier (0 when inside)."""
        if thickness_mm < self.min_mm:
            return self.min_mm - thickness_mm
        if self.max_mm is not None and thickness_mm > self.max_mm:
            return thickness_mm - self.max_mm
        return Decimal(0)


class RateTable:
    """Immutable (family, thickness) -> rate lookup."""

    def __init__(self, tiers_by_family: Mapping = None, policy=BoundaryPolicy.FAIL):
        self.policy = BoundaryPolicy.parse(policy)
        table = {}
        for family, tiers in (tiers_by_family or {}).items():
            family = OperationFamily.parse(family)
            table[family] = self._validate(family, tiers)
        self._table = MappingProxyType(table)

    @classmethod
    def from_rows(cls, rows: Iterable, policy=BoundaryPolicy.FAIL) -> "RateTable":
        """
        Build from configuration rows — ORM objects or dicts with
        family (or beveling_type), min_thickness, max_thickness, rate_per_meter.
        """
        grouped = {}
        for row in rows:
            get = row.get if isinstance(row, dict) else lambda key, default=None: getattr(row, key, default)
            family = get("family") or get("beveling_type")
            if family is None:
                raise InvalidTierConfiguration("?", "row has no family")
            grouped.setdefault(OperationFamily.parse(family), []).append(ThicknessTier(
                min_mm=to_decimal(get("min_thickness"), "min_thickness"),
                max_mm=None if get("max_thickness") is None else to_decimal(get("max_thickness"), "max_thickness"),
                rate_per_meter=to_decimal(get("rate_per_meter"), "rate_per_meter"),
            ))
        return cls(grouped, policy=policy)

    @staticmethod
    def _validate(family: OperationFamily, tiers) -> tuple:
        if not family.config.uses_rate_table:
            raise InvalidTierConfiguration(family, "manual families are not priced from the rate table")

        ordered = sorted(tiers, key=lambda t: t.min_mm)
        for tier in ordered:
            if tier.min_mm < 0 or tier.rate_per_meter < 0:
                raise InvalidTierConfiguration(family, f"negative value in tier starting at {tier.min_mm} mm")
            if tier.max_mm is not None and tier.min_mm >= tier.max_mm:
                raise InvalidTierConfiguration(
                    family, f"tier [{tier.min_mm}, {tier.max_mm}] has min >= max"
                )

        for lower, upper in zip(ordered, ordered[1:]):
            if lower.max_mm is None:
                raise InvalidTierConfiguration(
                    family, f"unbounded tier starting at {lower.min_mm} mm is not the last tier"
                )
            if upper.min_mm <= lower.max_mm:
                raise InvalidTierConfiguration(
                    family,
                    f"tiers [{lower.min_mm}, {lower.max_mm}] and "
                    f"[{upper.min_mm}, {upper.max_mm if upper.max_mm is not None else '∞'}] overlap",
                )
        return tuple(ordered)

    # --- Read-only accessors ---

    def families(self) -> list:
        return list(self._table)

    def tiers(self, family) -> tuple:
        return self._table.get(OperationFamily.parse(family), ())

    def tier_for(self, family, thickness_mm) -> ThicknessTier:
        family = OperationFamily.parse(family)
        thickness = to_decimal(thickness_mm, "thickness_mm")
        tiers = self._table.get(family, ())

        for tier in tiers:
            if tier.contains(thickness):
                return tier

        if self.policy is BoundaryPolicy.NEAREST and tiers:
            # min() keeps the first of equal distances -> lower tier wins ties
            return min(tiers, key=lambda t: t.distance(thickness))
        raise RateNotFound(family, thickness_mm)

    def rate_for(self, family, thickness_mm) -> Decimal:
        return self.tier_for(family, thickness_mm).rate_per_meter

    def __repr__(self):
        counts = ", ".join(f"{f.value}={len(t)}" for f, t in self._table.items())
        return f"RateTable(policy={self.policy.value}, {counts})"
