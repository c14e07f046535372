"""
Invoice totals from priced lines.

Totals are derived fresh from the line breakdowns every time — never patched
incrementally. Each sum runs over the unrounded line amounts and is rounded
once at the end, so totals don't drift with line order or compounding rounding.
"""

import enum
from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from .calculators.units import to_decimal
from .exceptions import InvalidDimensions
from .pricing_engine import LineBreakdown, round_money

ZERO = Decimal(0)

# Balances within a piaster of zero count as settled
PAID_TOLERANCE = Decimal("0.01")


class InvoiceTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    glass_total: Decimal
    cutting_total: Decimal
    subtotal: Decimal
    tax: Decimal = Decimal("0.00")  # placeholder until tax rules exist
    total: Decimal
    item_count: int


class InvoiceStatus(str, enum.Enum):
    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"


class PaymentSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: Decimal
    amount_paid: Decimal
    remaining_balance: Decimal
    status: InvoiceStatus


class InvoiceAggregator:
    """Stateless — calling it twice on the same lines gives identical totals."""

    def compute_totals(self, lines: Iterable[LineBreakdown]) -> InvoiceTotals:
        lines = list(lines)
        glass = sum((line.glass_amount * line.quantity for line in lines), ZERO)
        cutting = sum((line.cutting_amount * line.quantity for line in lines), ZERO)

        subtotal = round_money(glass + cutting)
        tax = round_money(ZERO)
        return InvoiceTotals(
            glass_total=round_money(glass),
            cutting_total=round_money(cutting),
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            item_count=len(lines),
        )

    def summarize_payment(self, totals: InvoiceTotals, amount_paid=0) -> PaymentSummary:
        """
        Remaining balance and payment status after an up-front payment.

        PAID when the remainder is within PAID_TOLERANCE (remainder reported as 0),
        PARTIALLY_PAID when something was paid, PENDING otherwise.
        """
        paid = round_money(to_decimal(amount_paid, "amount_paid"))
        if paid < 0:
            raise InvalidDimensions("amount_paid", paid, reason="must not be negative")

        remaining = round_money(totals.total - paid)
        if remaining <= PAID_TOLERANCE:
            status = InvoiceStatus.PAID
            remaining = round_money(ZERO)
        elif paid > 0:
            status = InvoiceStatus.PARTIALLY_PAID
        else:
            status = InvoiceStatus.PENDING

        return PaymentSummary(total=totals.total, amount_paid=paid,
                              remaining_balance=remaining, status=status)


def compute_invoice_totals(lines: Iterable[LineBreakdown]) -> InvoiceTotals:
    return InvoiceAggregator().compute_totals(lines)
