"""
Journal templates, one per voucher type.

Each template reads a saved voucher (header totals, items) and returns the
journal lines it must carry. Nothing here writes to the database; the
posting engine persists the lines and checks the balance.
"""
from decimal import Decimal
from typing import NamedTuple

from .. import chart
from ..models import Account
from .validation import party_account, system_account

ZERO = Decimal("0.00")


class Line(NamedTuple):
    account: Account
    debit: Decimal
    credit: Decimal
    narration: str = ""
    is_manual: bool = False


def dr(account, amount, narration=""):
    # a negative amount (lines with deductions above the quantity) lands
    # on the other side so journal lines stay non-negative
    if amount < 0:
        return Line(account, ZERO, -amount, narration)
    return Line(account, amount, ZERO, narration)


def cr(account, amount, narration=""):
    if amount < 0:
        return Line(account, -amount, ZERO, narration)
    return Line(account, ZERO, amount, narration)


# ---------- Trading vouchers ----------
def sales_invoice(voucher, manual_lines=None):
    lines = [
        dr(party_account(voucher.party), voucher.grand_total,
           "Amount receivable from/payable to party"),
        cr(system_account(chart.SALES), voucher.subtotal, "Sales of goods"),
    ]
    if voucher.tax_amount != 0:
        lines.append(cr(system_account(chart.TAX_PAYABLE),
                        voucher.tax_amount, "Output tax on sales"))
    if voucher.discount_amount > 0:
        lines.append(dr(system_account(chart.DISCOUNT_ALLOWED),
                        voucher.discount_amount, "Discount allowed to customer"))
    return lines


def purchase_invoice(voucher, manual_lines=None):
    lines = [dr(system_account(chart.PURCHASES), voucher.subtotal,
                "Purchase of goods")]
    if voucher.tax_amount != 0:
        lines.append(dr(system_account(chart.TAX_RECEIVABLE),
                        voucher.tax_amount, "Input tax on purchases"))
    lines.append(cr(party_account(voucher.party), voucher.grand_total,
                    "Amount payable to supplier"))
    if voucher.discount_amount > 0:
        lines.append(cr(system_account(chart.DISCOUNT_RECEIVED),
                        voucher.discount_amount, "Discount received from supplier"))
    return lines


def sales_return(voucher, manual_lines=None):
    lines = [dr(system_account(chart.SALES_RETURNS), voucher.subtotal,
                "Sales Return (Goods returned)")]
    if voucher.tax_amount != 0:
        lines.append(dr(system_account(chart.TAX_PAYABLE),
                        voucher.tax_amount, "Tax Reversal on Sales Return"))
    lines.append(cr(party_account(voucher.party), voucher.grand_total,
                    "Credit Note issued to Customer"))
    if voucher.discount_amount > 0:
        lines.append(cr(system_account(chart.DISCOUNT_ALLOWED),
                        voucher.discount_amount, "Reversal of Discount Allowed"))
    return lines


def purchase_return(voucher, manual_lines=None):
    lines = [
        dr(party_account(voucher.party), voucher.grand_total,
           "Debit Note issued to Supplier"),
        cr(system_account(chart.PURCHASE_RETURNS), voucher.subtotal,
           "Purchase Return (Goods returned)"),
    ]
    if voucher.tax_amount != 0:
        lines.append(cr(system_account(chart.TAX_RECEIVABLE),
                        voucher.tax_amount, "Tax Reversal on Purchase Return"))
    if voucher.discount_amount > 0:
        lines.append(dr(system_account(chart.DISCOUNT_RECEIVED),
                        voucher.discount_amount, "Reversal of Discount Received"))
    return lines


# ---------- Cash movements ----------
def payment(voucher, manual_lines=None):
    lines = [cr(voucher.account, voucher.grand_total, "Payment made")]
    for item in voucher.items.select_related("ledger_account"):
        label = item.description or item.ledger_account.name
        lines.append(dr(item.ledger_account, item.amount, f"Payment to {label}"))
    if voucher.tax_amount != 0:
        lines.append(dr(system_account(chart.TAX_RECEIVABLE),
                        voucher.tax_amount, "Tax on payment"))
    return lines


def receipt(voucher, manual_lines=None):
    lines = [dr(voucher.account, voucher.grand_total, "Receipt received")]
    for item in voucher.items.select_related("ledger_account"):
        label = item.description or item.ledger_account.name
        lines.append(cr(item.ledger_account, item.amount, f"Receipt from {label}"))
    if voucher.tax_amount != 0:
        lines.append(cr(system_account(chart.TAX_RECEIVABLE),
                        voucher.tax_amount, "Tax on receipt"))
    return lines


# ---------- Manual and opening vouchers ----------
def journal(voucher, manual_lines=None):
    return [
        Line(account, debit, credit, narration, is_manual=True)
        for account, debit, credit, narration in manual_lines or []
    ]


def opening_balance(voucher, manual_lines=None):
    # every user line gets a mirrored line on the adjustment account
    adjustment = system_account(chart.OPENING_ADJUSTMENT)
    lines = []
    for account, debit, credit, narration in manual_lines or []:
        lines.append(Line(account, debit, credit, narration))
        lines.append(Line(adjustment, credit, debit, "Auto-generated balancing entry"))
    return lines


def opening_stock(voucher, manual_lines=None):
    return [
        dr(system_account(chart.INVENTORY), voucher.total_amount, "Opening Stock Value"),
        cr(system_account(chart.OPENING_ADJUSTMENT), voucher.total_amount,
           "Opening Stock Value"),
    ]


TEMPLATES = {
    "sales_invoice": sales_invoice,
    "purchase_invoice": purchase_invoice,
    "sales_return": sales_return,
    "purchase_return": purchase_return,
    "payment": payment,
    "receipt": receipt,
    "journal": journal,
    "opening_balance": opening_balance,
    "opening_stock": opening_stock,
}

# Direction of goods per voucher type; types absent here move no stock
STOCK_DIRECTION = {
    "purchase_invoice": "IN",
    "sales_return": "IN",
    "opening_stock": "IN",
    "sales_invoice": "OUT",
    "purchase_return": "OUT",
}
