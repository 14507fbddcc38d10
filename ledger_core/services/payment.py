import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models, transaction

# Import models
from ..models import PaymentAllocation, Voucher
from .audit_helper import log_action
from .calculator import money
from .validation import as_date

logger = logging.getLogger(__name__)


# ----------------------------
# Invoice payment status
# ----------------------------
def recompute_payment_status(invoice: Voucher) -> str:
    """
    Derive the invoice's payment status from its allocations:
      paid            |allocated - grand total| < tolerance
      partially_paid  something allocated
      unpaid          nothing allocated
    """
    allocated = invoice.allocated_total()
    if abs(allocated - invoice.grand_total) < settings.LEDGER_BALANCE_TOLERANCE:
        status = "paid"
    elif allocated > 0:
        status = "partially_paid"
    else:
        status = "unpaid"

    if invoice.transition_to(status):
        logger.info("invoice %s is now %s (allocated %s of %s)",
                    invoice.voucher_no, status, allocated, invoice.grand_total)
    return status


# ----------------------------
# Allocation workflows
# ----------------------------
def create_allocation(
    payment_voucher_id: int,
    invoice_voucher_id: int,
    amount,
    allocation_date=None,
    remarks: str = "",
    user=None,
) -> PaymentAllocation:
    """
    Apply part (or all) of a payment/receipt to an invoice.
    Locks the invoice row while its allocated total is re-read.
    The payment's own unallocated balance is not checked.
    """
    amount = money(amount)
    if amount <= Decimal("0.00"):
        raise ValidationError("Allocated amount must be positive")

    with transaction.atomic():
        pay = Voucher.objects.alive().get(pk=payment_voucher_id)
        inv = Voucher.objects.alive().select_for_update().get(pk=invoice_voucher_id)

        # Validation: prevent over-allocation of the invoice
        already = inv.allocated_total()
        if already + amount > inv.grand_total + settings.LEDGER_BALANCE_TOLERANCE:
            raise ValidationError(
                f"Allocation of {amount} exceeds the outstanding "
                f"{inv.grand_total - already} of {inv.voucher_no}"
            )

        # X amount of this payment/receipt settles this invoice
        alloc = PaymentAllocation.objects.create(
            payment_voucher=pay,
            invoice_voucher=inv,
            allocated_amount=amount,
            allocation_date=as_date(allocation_date or pay.voucher_date, "allocation_date"),
            party=inv.party,
            remarks=remarks or "",
        )
        status = recompute_payment_status(inv)

        log_action(
            action="allocate",
            instance=alloc,
            user=user,
            changes={
                "payment_voucher": pay.voucher_no,
                "invoice_voucher": inv.voucher_no,
                "amount": str(amount),
                "payment_status": status,
            },
        )

    logger.info("allocated %s from %s to %s", amount, pay.voucher_no, inv.voucher_no)
    return alloc


def delete_allocation(allocation_id: int, user=None) -> str:
    """Remove an allocation and return the invoice's recomputed status."""
    with transaction.atomic():
        alloc = PaymentAllocation.objects.get(pk=allocation_id)
        inv = Voucher.objects.select_for_update().get(pk=alloc.invoice_voucher_id)

        log_action(
            action="deallocate",
            instance=alloc,
            user=user,
            changes={
                "invoice_voucher": inv.voucher_no,
                "amount": str(alloc.allocated_amount),
            },
        )
        alloc.delete()
        status = recompute_payment_status(inv)

    logger.info("removed allocation %s from %s", allocation_id, inv.voucher_no)
    return status


def create_quick_payment(
    invoice_id: int,
    amount,
    payment_account_id: int,
    payment_date,
    payment_method: str = "",
    reference: str = "",
    remarks: str = "",
    user=None,
) -> Voucher:
    """
    Settle an invoice in one step: post a payment (supplier) or receipt
    (customer) against the party's account and allocate it to the invoice.
    The new voucher remembers the invoice, so deleting the invoice
    takes it along.
    """
    from .posting import post_voucher  # avoid circular import

    with transaction.atomic():
        inv = Voucher.objects.invoices().select_related("party").get(pk=invoice_id)
        voucher_type = "payment" if inv.party.is_supplier else "receipt"

        settlement = post_voucher(
            voucher_type,
            {
                "voucher_date": payment_date,
                "party_id": inv.party_id,
                "account_id": payment_account_id,
                "reference": reference,
                "narration": remarks,
                "payment_method": payment_method,
                "created_from_invoice_id": inv.pk,
                "items": [{
                    "description": inv.party.name,
                    "amount": amount,
                    "remarks": remarks,
                }],
                "allocations": [{
                    "invoice_id": inv.pk,
                    "amount": amount,
                    "remarks": remarks,
                }],
            },
            user=user,
        )
    return settlement


# ----------------------------
# Read helpers
# ----------------------------
def get_outstanding_invoices(party_id=None, voucher_type=None):
    """Unpaid and partially paid invoices, oldest first."""
    qs = (
        Voucher.objects.invoices()
        .filter(payment_status__in=["unpaid", "partially_paid"])
        .select_related("party")
        .annotate(allocated=models.Sum("allocations_received__allocated_amount"))
        .order_by("voucher_date", "id")
    )
    if party_id is not None:
        qs = qs.filter(party_id=party_id)
    if voucher_type is not None:
        qs = qs.filter(voucher_type=voucher_type)

    rows = []
    for inv in qs:
        allocated = inv.allocated or Decimal("0.00")
        outstanding = inv.grand_total - allocated
        if outstanding <= settings.LEDGER_BALANCE_TOLERANCE:
            continue
        rows.append({
            "invoice_id": inv.pk,
            "voucher_no": inv.voucher_no,
            "voucher_type": inv.voucher_type,
            "voucher_date": inv.voucher_date,
            "party_id": inv.party_id,
            "party_name": inv.party.name if inv.party else "",
            "grand_total": inv.grand_total,
            "allocated": allocated,
            "outstanding": outstanding,
            "payment_status": inv.payment_status,
        })
    return rows


def get_payment_allocations(payment_voucher_id: int):
    return list(
        PaymentAllocation.objects
        .filter(payment_voucher_id=payment_voucher_id)
        .select_related("invoice_voucher")
    )


def get_invoice_allocations(invoice_voucher_id: int):
    return list(
        PaymentAllocation.objects
        .filter(invoice_voucher_id=invoice_voucher_id)
        .select_related("payment_voucher")
    )
