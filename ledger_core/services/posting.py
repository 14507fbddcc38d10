import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

# Import models
from ..exceptions import MissingAccountError, UnknownVoucherTypeError
from ..models import (JournalEntry, OpeningBalance, Party, Product,
                      StockMovement, Voucher, VoucherItem)
from ..models.voucher import (INVOICE_TYPES, PARTY_TYPES_REQUIRED,
                              SETTLEMENT_TYPES)
from .audit_helper import log_action
from .calculator import (compute_ledger_line, compute_line,
                         compute_voucher_totals, money, quantity,
                         to_decimal)
from .payment import create_allocation, recompute_payment_status
from .sequencing import next_number
from .templates import STOCK_DIRECTION, TEMPLATES
from .validation import (as_date, assert_balanced, clean_manual_lines,
                         party_account, posting_account)

logger = logging.getLogger(__name__)

# Which party type each trading voucher is raised against
PARTY_SIDE = {
    "sales_invoice": "customer",
    "sales_return": "customer",
    "purchase_invoice": "supplier",
    "purchase_return": "supplier",
}
# Vouchers built from user debit/credit lines instead of items
LINE_TYPES = ("journal", "opening_balance")
# Non-invoice vouchers whose rows are removed with them on delete
GOODS_TYPES = ("sales_return", "purchase_return", "opening_stock")


# ----------------------------
# Voucher workflows
# ----------------------------
def post_voucher(voucher_type: str, data: dict, user=None) -> Voucher:
    """
    Create and post a voucher in one atomic unit:
      1. issue the voucher number
      2. save the header with computed totals
      3. save the items
      4. write the journal from the type's template
      5. write stock movements for product lines
    Payments/receipts then apply `data["allocations"]` to invoices.
    Any failure rolls back every step, the number included.
    """
    if voucher_type not in TEMPLATES:
        raise UnknownVoucherTypeError(f"Unknown voucher type '{voucher_type}'")

    with transaction.atomic():
        voucher = Voucher(
            voucher_type=voucher_type,
            voucher_no=next_number(voucher_type),
            created_by=user,
        )
        if voucher.is_invoice:
            voucher.payment_status = "unpaid"
        _write_voucher(voucher, data)

        if voucher.is_settlement:
            _apply_allocations(voucher, data.get("allocations") or [], user)

        log_action(
            action="create",
            instance=voucher,
            user=user,
            changes=_summary(voucher),
        )

    logger.info("posted %s %s total=%s", voucher.voucher_type,
                voucher.voucher_no, voucher.grand_total)
    return voucher


def update_voucher(voucher_id: int, data: dict, user=None) -> Voucher:
    """
    Replace a voucher's content. Items, journal entries, stock movements,
    opening-balance records and (for payments/receipts) allocations are
    deleted and regenerated from `data`; nothing is patched in place.
    Type and number are kept.
    """
    with transaction.atomic():
        # Lock the row to avoid concurrent edits
        voucher = Voucher.objects.alive().select_for_update().get(pk=voucher_id)
        before = _summary(voucher)

        touched_invoices = []
        if voucher.is_settlement:
            touched_invoices = list(
                voucher.allocations_made.values_list("invoice_voucher_id", flat=True))
            voucher.allocations_made.all().delete()

        _clear_derived_rows(voucher)
        _write_voucher(voucher, data)

        if voucher.is_settlement:
            _apply_allocations(voucher, data.get("allocations") or [], user)
            for inv in Voucher.objects.filter(pk__in=touched_invoices):
                recompute_payment_status(inv)
        elif voucher.is_invoice:
            # new grand total, same allocations
            allocated = voucher.allocated_total()
            if allocated > voucher.grand_total + settings.LEDGER_BALANCE_TOLERANCE:
                raise ValidationError(
                    f"{voucher.voucher_no} already has {money(allocated)} allocated; "
                    f"its total cannot drop to {voucher.grand_total}")
            recompute_payment_status(voucher)

        log_action(
            action="update",
            instance=voucher,
            user=user,
            changes={"before": before, "after": _summary(voucher)},
        )

    logger.info("updated %s total=%s", voucher.voucher_no, voucher.grand_total)
    return voucher


def delete_voucher(voucher_id: int, user=None) -> Voucher:
    """
    Soft-delete a voucher.
    - invoices drop their allocations, journal and stock rows, and take
      down every payment/receipt raised from them (quick payments)
    - payments/receipts drop their allocations and re-derive the status
      of the invoices they settled
    - returns and opening stock drop their journal, stock and item rows
    - journals and opening balances keep their rows as history; reports
      skip deleted vouchers
    """
    with transaction.atomic():
        voucher = Voucher.objects.alive().select_for_update().get(pk=voucher_id)
        touched_invoices = set()

        if voucher.is_invoice:
            voucher.allocations_received.all().delete()
            voucher.journal_entries.all().delete()
            voucher.stock_movements.all().delete()
            for child in voucher.settlement_children.alive():
                touched_invoices.update(
                    child.allocations_made.exclude(invoice_voucher=voucher)
                    .values_list("invoice_voucher_id", flat=True))
                child.allocations_made.all().delete()
                child.journal_entries.all().delete()
                _soft_delete(child)
                log_action(action="delete", instance=child, user=user,
                           changes={"cascade_from": voucher.voucher_no})
                logger.info("deleted %s together with %s",
                            child.voucher_no, voucher.voucher_no)
        elif voucher.voucher_type in GOODS_TYPES:
            voucher.journal_entries.all().delete()
            voucher.stock_movements.all().delete()
            voucher.items.all().delete()
        elif voucher.is_settlement:
            touched_invoices.update(
                voucher.allocations_made.values_list("invoice_voucher_id", flat=True))
            voucher.allocations_made.all().delete()

        _soft_delete(voucher)
        for inv in Voucher.objects.alive().filter(pk__in=touched_invoices):
            recompute_payment_status(inv)

        log_action(action="delete", instance=voucher, user=user,
                   changes=_summary(voucher))

    logger.info("deleted %s %s", voucher.voucher_type, voucher.voucher_no)
    return voucher


# ----------------------------
# Internals
# ----------------------------
def _soft_delete(voucher):
    voucher.deleted_at = timezone.now()
    voucher.save(update_fields=["deleted_at", "updated_at"])


def _clear_derived_rows(voucher):
    voucher.items.all().delete()
    voucher.journal_entries.all().delete()
    voucher.stock_movements.all().delete()
    voucher.opening_balances.all().delete()


def _resolve_party(voucher_type, party_id):
    if not party_id:
        if voucher_type in PARTY_TYPES_REQUIRED:
            raise MissingAccountError(f"A {voucher_type} requires a party")
        return None
    try:
        party = Party.objects.alive().get(pk=party_id)
    except Party.DoesNotExist:
        raise MissingAccountError(f"Party {party_id} not found")
    expected = PARTY_SIDE.get(voucher_type)
    if expected and party.party_type != expected:
        raise ValidationError(
            f"A {voucher_type} must be raised against a {expected}, "
            f"'{party.name}' is a {party.party_type}")
    # fail early if the party's account is gone
    party_account(party)
    return party


def _write_voucher(voucher, data):
    """Fill header, items, journal and stock of `voucher` from `data`."""
    vtype = voucher.voucher_type
    party = _resolve_party(vtype, data.get("party_id"))

    voucher.voucher_date = as_date(data.get("voucher_date"), "voucher_date")
    voucher.party = party
    voucher.reference = data.get("reference") or ""
    voucher.narration = data.get("narration") or ""
    voucher.account = None
    if data.get("created_from_invoice_id"):
        voucher.created_from_invoice = Voucher.objects.invoices().get(
            pk=data["created_from_invoice_id"])

    manual_lines = None
    item_rows = []
    if vtype in LINE_TYPES:
        # journal lines must balance, opening lines are balanced by mirroring
        manual_lines = clean_manual_lines(
            data.get("lines"), require_balance=(vtype == "journal"))
        debit = sum((ln[1] for ln in manual_lines), Decimal("0.00"))
        credit = sum((ln[2] for ln in manual_lines), Decimal("0.00"))
        voucher.subtotal = voucher.total_amount = max(debit, credit)
        voucher.discount_rate = Decimal("0.000")
        voucher.discount_amount = voucher.tax_amount = Decimal("0.00")
    else:
        if vtype in SETTLEMENT_TYPES:
            voucher.account = posting_account(data.get("account_id"))
            voucher.metadata = {"method": data.get("payment_method") or ""}
            item_rows = [_settlement_item(row, party, i)
                         for i, row in enumerate(data.get("items") or [], start=1)]
        else:
            item_rows = [_product_item(row, vtype, i)
                         for i, row in enumerate(data.get("items") or [], start=1)]
        if not item_rows:
            raise ValidationError("At least one item is required")

        discount_rate = to_decimal(data.get("discount_rate"), "discount_rate")
        if vtype in SETTLEMENT_TYPES or vtype == "opening_stock":
            discount_rate, discount_amount = Decimal("0"), Decimal("0")
        else:
            discount_amount = data.get("discount_amount")
        totals = compute_voucher_totals(
            [amounts for _, amounts in item_rows], discount_rate, discount_amount)
        if totals.discount_amount > 0 and totals.total_amount < 0:
            raise ValidationError("Discount cannot exceed the subtotal")
        voucher.subtotal = totals.subtotal
        voucher.discount_rate = quantity(discount_rate)
        voucher.discount_amount = totals.discount_amount
        voucher.tax_amount = totals.tax_amount
        voucher.total_amount = totals.total_amount

    voucher.status = "posted"
    voucher.save()

    # items
    for fields, amounts in item_rows:
        VoucherItem.objects.create(
            voucher=voucher,
            final_quantity=amounts.final_quantity,
            amount=amounts.amount,
            discount_amount=amounts.discount_amount,
            tax_amount=amounts.tax_amount,
            **fields,
        )

    # journal
    for line in TEMPLATES[vtype](voucher, manual_lines):
        if line.debit == 0 and line.credit == 0:
            continue
        JournalEntry.objects.create(
            voucher=voucher,
            account=line.account,
            debit=line.debit,
            credit=line.credit,
            narration=line.narration,
            is_manual=line.is_manual,
        )

    # stock
    direction = STOCK_DIRECTION.get(vtype)
    if direction:
        for item in voucher.items.filter(product__isnull=False):
            StockMovement.objects.create(
                voucher=voucher,
                product_id=item.product_id,
                movement_type=direction,
                quantity=item.final_quantity,
                count=item.count,
                rate=item.rate,
                amount=item.amount,
            )

    # one opening-balance record per user line
    if vtype == "opening_balance":
        for account, debit, credit, _ in manual_lines:
            OpeningBalance.objects.create(
                account=account,
                voucher=voucher,
                opening_debit=debit,
                opening_credit=credit,
                financial_year=voucher.voucher_date.year,
            )

    assert_balanced(voucher)
    return voucher


def _product_item(row, voucher_type, index):
    product = None
    if row.get("product_id"):
        try:
            product = Product.objects.alive().get(pk=row["product_id"])
        except Product.DoesNotExist:
            raise ValidationError(f"Line {index}: product {row['product_id']} not found")
    elif voucher_type == "opening_stock":
        raise ValidationError(f"Line {index}: opening stock needs a product")

    amounts = compute_line(
        initial_quantity=row.get("initial_quantity"),
        rate=row.get("rate"),
        count=row.get("count"),
        deduction_per_unit=row.get("deduction_per_unit"),
        discount_percent=row.get("discount_percent"),
        discount_amount=row.get("discount_amount"),
        tax_rate=row.get("tax_rate"),
    )
    fields = {
        "product": product,
        "description": row.get("description") or (product.name if product else ""),
        "initial_quantity": to_decimal(row.get("initial_quantity")),
        "count": to_decimal(row.get("count")),
        "deduction_per_unit": to_decimal(row.get("deduction_per_unit")),
        "rate": to_decimal(row.get("rate")),
        "discount_percent": quantity(row.get("discount_percent")),
        "tax_rate": quantity(row.get("tax_rate")),
        "remarks": row.get("remarks") or "",
    }
    return fields, amounts


def _settlement_item(row, party, index):
    # payee: explicit account, else the voucher party's account
    if row.get("account_id"):
        payee = posting_account(row["account_id"])
    elif party is not None:
        payee = party_account(party)
    else:
        raise MissingAccountError(f"Line {index} has no payee account")

    amounts = compute_ledger_line(row.get("amount"), row.get("tax_rate"))
    if amounts.amount <= 0:
        raise ValidationError(f"Line {index}: amount must be positive")
    fields = {
        "ledger_account": payee,
        "description": row.get("description") or payee.name,
        "rate": amounts.amount,
        "tax_rate": quantity(row.get("tax_rate")),
        "remarks": row.get("remarks") or "",
    }
    return fields, amounts


def _apply_allocations(voucher, allocations, user):
    for alloc in allocations:
        create_allocation(
            voucher.pk,
            alloc["invoice_id"],
            alloc["amount"],
            allocation_date=alloc.get("allocation_date") or voucher.voucher_date,
            remarks=alloc.get("remarks") or "",
            user=user,
        )


def _summary(voucher):
    return {
        "voucher_no": voucher.voucher_no,
        "voucher_type": voucher.voucher_type,
        "voucher_date": str(voucher.voucher_date),
        "party_id": voucher.party_id,
        "subtotal": str(voucher.subtotal),
        "discount_amount": str(voucher.discount_amount),
        "tax_amount": str(voucher.tax_amount),
        "total_amount": str(voucher.total_amount),
        "payment_status": voucher.payment_status,
    }
