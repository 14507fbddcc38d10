from decimal import Decimal
from django.core.exceptions import ValidationError
from django.db import models
from .party import Party
from .voucher import INVOICE_TYPES, SETTLEMENT_TYPES, Voucher

# Which settlement type may settle which invoice type
SETTLES = {
    "receipt": "sales_invoice",      # money in from a customer
    "payment": "purchase_invoice",   # money out to a supplier
}


# ---------- Payment ↔ Invoice bridge ----------
class PaymentAllocation(models.Model):
    """ This represents X amount of this payment/receipt settles this invoice """

    payment_voucher = models.ForeignKey(
        Voucher, on_delete=models.CASCADE, related_name="allocations_made")
    invoice_voucher = models.ForeignKey(
        Voucher, on_delete=models.CASCADE, related_name="allocations_received")
    allocated_amount = models.DecimalField(max_digits=18, decimal_places=2)
    allocation_date = models.DateField()
    # Denormalized from the invoice for party-level lookups
    party = models.ForeignKey(
        Party, null=True, blank=True, on_delete=models.PROTECT,
        related_name="allocations")
    remarks = models.CharField(max_length=400, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(allocated_amount__gt=0),
                name="allocation_amount_positive",
            ),
        ]

    def __str__(self):
        return f"{self.payment_voucher_id} → {self.invoice_voucher_id}: {self.allocated_amount}"

    def clean(self):
        if self.allocated_amount is None or self.allocated_amount <= Decimal("0.00"):
            raise ValidationError("Allocated amount must be positive")

        pay = self.payment_voucher
        inv = self.invoice_voucher
        if pay.voucher_type not in SETTLEMENT_TYPES:
            raise ValidationError(
                f"{pay.voucher_no} is not a payment or receipt.")
        if inv.voucher_type not in INVOICE_TYPES:
            raise ValidationError(f"{inv.voucher_no} is not an invoice.")
        if SETTLES[pay.voucher_type] != inv.voucher_type:
            raise ValidationError(
                f"A {pay.get_voucher_type_display()} cannot settle a "
                f"{inv.get_voucher_type_display()}."
            )
        if pay.deleted_at is not None or inv.deleted_at is not None:
            raise ValidationError("Cannot allocate against a deleted voucher.")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
