from decimal import ROUND_HALF_UP, Decimal
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from ..managers import VoucherManager
from .account import Account
from .party import Party
from .product import Product

VOUCHER_TYPES = [
    ("sales_invoice", "Sales Invoice"),
    ("purchase_invoice", "Purchase Invoice"),
    ("sales_return", "Sales Return"),
    ("purchase_return", "Purchase Return"),
    ("payment", "Payment"),
    ("receipt", "Receipt"),
    ("journal", "Journal"),
    ("opening_balance", "Opening Balance"),
    ("opening_stock", "Opening Stock"),
]

# Types that are settled by payments/receipts and carry a payment_status
INVOICE_TYPES = ("sales_invoice", "purchase_invoice")
# Types that settle invoices through PaymentAllocation rows
SETTLEMENT_TYPES = ("payment", "receipt")
# Types posted against a customer/supplier account
PARTY_TYPES_REQUIRED = (
    "sales_invoice", "purchase_invoice", "sales_return", "purchase_return")

VOUCHER_STATUS = [
    ("draft", "Draft"),
    ("posted", "Posted"),  # every voucher is posted once created
]

PAYMENT_STATUS = [
    ("unpaid", "Unpaid"),
    ("partially_paid", "Partially paid"),
    ("paid", "Paid"),
]

TWO_PLACES = Decimal("0.01")
THREE_PLACES = Decimal("0.001")


# ---------- Voucher numbering ----------
class VoucherSequence(models.Model):
    """Per-type counter behind the human voucher number, e.g. SI-0001."""

    voucher_type = models.CharField(
        max_length=20, choices=VOUCHER_TYPES, unique=True)
    prefix = models.CharField(max_length=10)
    next_number = models.PositiveIntegerField(default=1)
    padding = models.PositiveSmallIntegerField(default=4)

    def __str__(self):
        return f"{self.voucher_type}: {self.format_number(self.next_number)}"

    def format_number(self, number):
        return f"{self.prefix}-{number:0{self.padding}d}"


# ---------- Voucher (Header) ----------
class Voucher(models.Model):  # One business transaction
    voucher_no = models.CharField(max_length=32, unique=True)
    voucher_type = models.CharField(max_length=20, choices=VOUCHER_TYPES)
    voucher_date = models.DateField()
    reference = models.CharField(max_length=200, blank=True, default="")

    # Customer/supplier (nullable for journal/opening vouchers)
    party = models.ForeignKey(
        Party,
        null=True,
        blank=True,
        on_delete=models.PROTECT,  # parties are soft-deleted, never dropped under vouchers
        related_name="vouchers",
    )
    # Cash/bank account paid from (payment) or received into (receipt)
    account = models.ForeignKey(
        Account,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="settlement_vouchers",
    )

    # Money
    subtotal = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    discount_rate = models.DecimalField(
        max_digits=7, decimal_places=3, default=Decimal("0.000"))
    discount_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    # subtotal - discount (tax is kept apart, see grand_total)
    total_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))

    narration = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=10, choices=VOUCHER_STATUS, default="posted")
    # Only meaningful for INVOICE_TYPES
    payment_status = models.CharField(
        max_length=15, choices=PAYMENT_STATUS, null=True, blank=True)

    # Quick payments remember the invoice they were raised for,
    # so deleting the invoice can take them along
    created_from_invoice = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="settlement_children",
    )
    metadata = models.JSONField(null=True, blank=True)  # e.g. {"method": "cheque"}

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = VoucherManager()

    class Meta:
        indexes = [
            models.Index(fields=["voucher_type", "voucher_date"], name="voucher_type_date_idx"),
            models.Index(fields=["party", "voucher_type"], name="voucher_party_type_idx"),
            models.Index(fields=["voucher_date", "id"], name="voucher_date_id_idx"),
        ]
        constraints = [
            # subtotal and tax follow the lines and may go negative
            models.CheckConstraint(
                condition=models.Q(discount_amount__gte=0),
                name="voucher_discount_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.voucher_no} {self.voucher_date} [{self.voucher_type}]"

    @property
    def is_invoice(self):
        return self.voucher_type in INVOICE_TYPES

    @property
    def is_settlement(self):
        return self.voucher_type in SETTLEMENT_TYPES

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @property
    def grand_total(self):
        """What the party owes / is owed: subtotal - discount + tax."""
        return (self.total_amount + self.tax_amount).quantize(TWO_PLACES)

    # Aggregate all debit and credit amounts across the voucher's journal
    def compute_totals(self):
        """Return debits, credits sums for journal entries"""
        aggs = self.journal_entries.aggregate(
            total_debit=models.Sum("debit"),
            total_credit=models.Sum("credit"),
        )
        return (
            aggs["total_debit"] or Decimal("0.00"),
            aggs["total_credit"] or Decimal("0.00"),
        )

    def is_balanced(self, tolerance=None):
        if tolerance is None:
            tolerance = settings.LEDGER_BALANCE_TOLERANCE
        debit, credit = self.compute_totals()
        return abs(debit - credit) <= tolerance

    def allocated_total(self):
        """Sum of allocations received by this invoice."""
        return self.allocations_received.aggregate(
            total=models.Sum("allocated_amount")
        )["total"] or Decimal("0.00")

    def clean(self):
        if self.payment_status and not self.is_invoice:
            raise ValidationError(
                "Only invoices carry a payment status.")
        if self.is_invoice and not self.payment_status:
            raise ValidationError("Invoices require a payment status.")
        if self.voucher_type in PARTY_TYPES_REQUIRED and not self.party_id:
            raise ValidationError(
                f"A {self.get_voucher_type_display()} requires a party.")
        if self.is_settlement and not self.account_id:
            raise ValidationError(
                f"A {self.get_voucher_type_display()} requires a cash or bank account.")

        # Voucher type and number never change after creation
        if self.pk:
            orig = Voucher.objects.filter(pk=self.pk).only(
                "voucher_type", "voucher_no").first()
            if orig and (orig.voucher_type != self.voucher_type
                         or orig.voucher_no != self.voucher_no):
                raise ValidationError(
                    "Cannot change the type or number of an existing voucher.")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    # Control payment status changes (unpaid → partially_paid → paid and back)
    def transition_to(self, new_status):
        allowed = {
            "unpaid": ["partially_paid", "paid"],
            "partially_paid": ["unpaid", "paid"],
            "paid": ["partially_paid", "unpaid"],
        }
        if not self.is_invoice:
            raise ValidationError(
                f"{self.voucher_no} is not an invoice and has no payment status.")
        if new_status == self.payment_status:
            return False
        if new_status not in allowed.get(self.payment_status, []):
            raise ValidationError(
                f"Cannot go from {self.payment_status} to {new_status}")
        self.payment_status = new_status
        self.save(update_fields=["payment_status", "updated_at"])
        return True


class VoucherItem(models.Model):
    """
    One line of a voucher. Product lines use the quantity fields; payment
    and receipt lines only carry an amount against a ledger_account.
    Derived fields are filled by services.calculator before saving.
    """

    voucher = models.ForeignKey(
        Voucher, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        Product, null=True, blank=True, on_delete=models.PROTECT,
        related_name="voucher_items")
    # Payee/payer account of a payment or receipt line
    ledger_account = models.ForeignKey(
        Account, null=True, blank=True, on_delete=models.PROTECT,
        related_name="voucher_items")
    description = models.CharField(max_length=400, blank=True, default="")

    # Quantity math: final = initial - count * deduction_per_unit
    initial_quantity = models.DecimalField(
        max_digits=18, decimal_places=3, default=Decimal("0.000"))
    count = models.DecimalField(
        max_digits=18, decimal_places=3, default=Decimal("0.000"))
    deduction_per_unit = models.DecimalField(
        max_digits=18, decimal_places=3, default=Decimal("0.000"))
    # May go negative when deductions exceed the initial quantity
    final_quantity = models.DecimalField(
        max_digits=18, decimal_places=3, default=Decimal("0.000"))

    rate = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    discount_percent = models.DecimalField(
        max_digits=7, decimal_places=3, default=Decimal("0.000"))
    discount_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    tax_rate = models.DecimalField(
        max_digits=7, decimal_places=3, default=Decimal("0.000"))
    tax_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    remarks = models.CharField(max_length=400, blank=True, default="")

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.voucher_id} | {self.description or self.product_id} | {self.amount}"

    @property
    def taxable_amount(self):
        return self.amount - self.discount_amount

    def save(self, *args, **kwargs):
        # round to storage precision before validation
        for f in ("rate", "amount", "discount_amount", "tax_amount"):
            setattr(self, f, Decimal(getattr(self, f)).quantize(
                TWO_PLACES, rounding=ROUND_HALF_UP))
        for f in ("initial_quantity", "count", "deduction_per_unit", "final_quantity"):
            setattr(self, f, Decimal(getattr(self, f)).quantize(
                THREE_PLACES, rounding=ROUND_HALF_UP))
        self.full_clean()
        return super().save(*args, **kwargs)
