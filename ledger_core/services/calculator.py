"""
Line-item arithmetic for vouchers. Pure functions, no database access.

    final_quantity = initial_quantity - count * deduction_per_unit
    amount         = final_quantity * rate
    discount       = amount * discount_percent / 100   (percent wins)
                     or the explicit discount_amount
    taxable        = amount - discount
    tax            = taxable * tax_rate / 100

Money is rounded half-up to 2 places, quantities to 3.
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, NamedTuple

from django.core.exceptions import ValidationError

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")
THREE_PLACES = Decimal("0.001")


class LineAmounts(NamedTuple):
    final_quantity: Decimal
    amount: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal


class VoucherTotals(NamedTuple):
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    grand_total: Decimal


def to_decimal(value, field="value") -> Decimal:
    """Accept Decimal, int, str or float (via str) and return a Decimal."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid number for {field}: {value!r}")


def money(value) -> Decimal:
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def quantity(value) -> Decimal:
    return to_decimal(value).quantize(THREE_PLACES, rounding=ROUND_HALF_UP)


def compute_line(
    initial_quantity,
    rate,
    count=0,
    deduction_per_unit=0,
    discount_percent=0,
    discount_amount=0,
    tax_rate=0,
) -> LineAmounts:
    # A negative result (deductions above the initial quantity) is kept as-is
    final_qty = quantity(
        to_decimal(initial_quantity, "initial_quantity")
        - to_decimal(count, "count") * to_decimal(deduction_per_unit, "deduction_per_unit")
    )
    amount = money(final_qty * to_decimal(rate, "rate"))

    pct = to_decimal(discount_percent, "discount_percent")
    if pct > 0:
        discount = money(amount * pct / HUNDRED)
    else:
        discount = money(discount_amount)

    taxable = amount - discount
    tax = money(taxable * to_decimal(tax_rate, "tax_rate") / HUNDRED)
    return LineAmounts(final_qty, amount, discount, taxable, tax)


def compute_ledger_line(amount, tax_rate=0) -> LineAmounts:
    """Payment/receipt line: the amount is given, tax is charged on top."""
    amount = money(amount)
    tax = money(amount * to_decimal(tax_rate, "tax_rate") / HUNDRED)
    return LineAmounts(Decimal("0.000"), amount, ZERO, amount, tax)


def compute_voucher_totals(
    lines: Iterable[LineAmounts],
    discount_rate=0,
    discount_amount=0,
) -> VoucherTotals:
    lines = list(lines)
    subtotal = money(sum((ln.taxable_amount for ln in lines), ZERO))
    tax = money(sum((ln.tax_amount for ln in lines), ZERO))

    rate = to_decimal(discount_rate, "discount_rate")
    if rate > 0:
        discount = money(subtotal * rate / HUNDRED)
    else:
        discount = money(discount_amount)

    total = subtotal - discount
    return VoucherTotals(subtotal, discount, tax, total, total + tax)
