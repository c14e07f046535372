"""
Invoice aggregator tests — totals derived from priced lines.

Tests:
1-2. Sums and the tax placeholder
3-4. Order independence and idempotence
5.   Single rounding at the end of each sum
6-8. Payment summary
"""

from decimal import Decimal
from itertools import permutations

from glasspos.calculators.units import Dimensions
from glasspos.invoice_aggregator import (
    InvoiceAggregator,
    InvoiceStatus,
    compute_invoice_totals,
)
from glasspos.pricing_engine import CalculationEngine, ManualOverride


def _lines(rate_table):
    engine = CalculationEngine(rate_table)
    common = {"unit": "MM", "pricing_method": "AREA", "family": "KHARZAN", "thickness_mm": 4}
    return [
        engine.compute_line("STRAIGHT", Dimensions.of(1000, 500), glass_rate=50, **common),
        engine.compute_line("FULL_FRAME", Dimensions.of(333, 333), glass_rate=50, quantity=2, **common),
        engine.compute_line("CURVE_ARCH", Dimensions.of(1200, 700), glass_rate="37.5",
                            manual_override=ManualOverride(price="12.345"), **common),
        engine.compute_line("CIRCLE", Dimensions.of(450, 450, diameter=450), glass_rate=80, **common),
    ]


# ============================================================
# Sums
# ============================================================

def test_totals_sum_lines(rate_table):
    lines = _lines(rate_table)
    totals = compute_invoice_totals(lines)
    assert totals.item_count == 4
    assert totals.tax == Decimal("0.00")
    assert totals.total == totals.subtotal + totals.tax
    assert abs(totals.subtotal - (totals.glass_total + totals.cutting_total)) <= Decimal("0.01")


def test_empty_invoice():
    totals = compute_invoice_totals([])
    assert totals.item_count == 0
    assert totals.total == Decimal("0.00")


# ============================================================
# Order independence / idempotence
# ============================================================

def test_totals_are_order_independent(rate_table):
    lines = _lines(rate_table)
    expected = compute_invoice_totals(lines)
    for perm in permutations(lines):
        assert compute_invoice_totals(perm) == expected


def test_totals_are_idempotent(rate_table):
    aggregator = InvoiceAggregator()
    lines = _lines(rate_table)
    assert aggregator.compute_totals(lines) == aggregator.compute_totals(lines)
    # Generators work too
    assert aggregator.compute_totals(iter(lines)) == aggregator.compute_totals(lines)


def test_rounding_happens_once_per_sum(rate_table):
    """
    Three 333 × 333 mm straight lines at 50/m², 4 mm KHARZAN.
    Each line: glass 5.54445, cutting 9.324. Rounding per line first would
    give a glass total of 16.62; summing exact amounts gives 16.63.
    """
    engine = CalculationEngine(rate_table)
    line = engine.compute_line("STRAIGHT", Dimensions.of(333, 333), "MM", 50, "AREA",
                               family="KHARZAN", thickness_mm=4)
    totals = compute_invoice_totals([line, line, line])
    assert line.glass_price * 3 == Decimal("16.62")
    assert totals.glass_total == Decimal("16.63")
    assert totals.cutting_total == Decimal("27.97")   # 27.972
    assert totals.subtotal == Decimal("44.61")        # 44.60535


# ============================================================
# Payment summary
# ============================================================

def test_payment_pending_and_partial(rate_table):
    aggregator = InvoiceAggregator()
    totals = aggregator.compute_totals(_lines(rate_table)[:1])  # 46.00
    pending = aggregator.summarize_payment(totals)
    assert pending.status is InvoiceStatus.PENDING
    assert pending.remaining_balance == Decimal("46.00")

    partial = aggregator.summarize_payment(totals, "20")
    assert partial.status is InvoiceStatus.PARTIALLY_PAID
    assert partial.remaining_balance == Decimal("26.00")


def test_payment_within_tolerance_counts_as_paid(rate_table):
    aggregator = InvoiceAggregator()
    totals = aggregator.compute_totals(_lines(rate_table)[:1])
    paid = aggregator.summarize_payment(totals, "45.99")
    assert paid.status is InvoiceStatus.PAID
    assert paid.remaining_balance == Decimal("0.00")


def test_overpayment_is_paid(rate_table):
    aggregator = InvoiceAggregator()
    totals = aggregator.compute_totals(_lines(rate_table)[:1])
    assert aggregator.summarize_payment(totals, 50).status is InvoiceStatus.PAID
