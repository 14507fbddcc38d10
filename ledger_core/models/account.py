from decimal import Decimal
from django.core.exceptions import ValidationError
from django.db import models
from ..managers import SoftDeleteManager

# Choice Lists
AC_TYPES = [
    # Used by Account and AccountGroup to classify general ledger accounts
    ("Asset", "Asset"),
    ("Liability", "Liability"),
    ("Equity", "Equity"),
    ("Income", "Income"),
    ("Expense", "Expense"),
]

# Side on which the static opening balance sits
BALANCE_SIDES = [
    ("Dr", "Debit"),
    ("Cr", "Credit"),
]

# Fields a system account may never change once created
SYSTEM_LOCKED_FIELDS = ("code", "ac_type", "group_id", "party_id", "is_system")


class AccountGroup(models.Model):
    """Reporting bucket for accounts (e.g. "Accounts Receivable", "Cash")."""

    name = models.CharField(max_length=100, unique=True)
    ac_type = models.CharField(max_length=10, choices=AC_TYPES)
    description = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["ac_type", "name"]

    def __str__(self):
        return self.name


class Account(models.Model):
    """
    Ledger account in the Chart of Accounts.
    - code is unique across the whole chart
    - ac_type: determines reporting - BS vs P&L
    - opening_balance/opening_balance_side: static balance carried
      into every ledger report as its starting point
    - party: set for the one account owned by a customer/supplier
    """

    # Every account has a code
    # which lets you sort/group accounts consistently in reports
    # (e.g. "1001" Cash, "1003-7" the account of party 7)
    code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=200)

    # Classify account into one of the 5 basic accounting types
    ac_type = models.CharField(max_length=10, choices=AC_TYPES)

    group = models.ForeignKey(
        AccountGroup,
        null=True,
        blank=True,
        on_delete=models.PROTECT,  # can't drop a group that still has accounts
        related_name="accounts",
    )
    description = models.CharField(max_length=255, blank=True, default="")

    # Static balance brought forward from before the books started
    opening_balance = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    opening_balance_side = models.CharField(
        max_length=2, choices=BALANCE_SIDES, default="Dr")

    # Explicit 1:1 link to the owning customer/supplier
    # (replaces deriving the account from a code pattern)
    party = models.OneToOneField(
        "Party",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="account",
    )

    # "soft deactivate" accounts (hide in UI, stop new postings)
    # without deleting history
    is_active = models.BooleanField(default=True)
    # Seeded accounts the posting templates depend on
    is_system = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SoftDeleteManager()

    class Meta:
        indexes = [
            # For reports grouped by ac_type (Trial Balance, P&L, Balance Sheet)
            models.Index(fields=["ac_type"], name="account_type_idx"),
            models.Index(fields=["is_active", "deleted_at"], name="account_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(opening_balance__gte=0),
                name="account_opening_balance_non_negative",
            ),
        ]
        ordering = ["code"]

    def __str__(self):
        return f"{self.code} – {self.name}"

    @property
    def signed_opening_balance(self):
        """Opening balance as a signed number: positive = Dr, negative = Cr."""
        if self.opening_balance_side == "Cr":
            return -self.opening_balance
        return self.opening_balance

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def clean(self):
        # Group type must agree with the account type
        if self.group_id and self.group.ac_type != self.ac_type:
            raise ValidationError(
                f"Account group '{self.group.name}' holds {self.group.ac_type} "
                f"accounts, not {self.ac_type}."
            )

        # System accounts are structurally immutable
        if self.pk:
            orig = Account.objects.filter(pk=self.pk).first()
            if orig and orig.is_system:
                changed = [
                    f for f in SYSTEM_LOCKED_FIELDS
                    if getattr(orig, f) != getattr(self, f)
                ]
                if changed:
                    raise ValidationError(
                        f"Cannot modify {changed} on a system account."
                    )

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)
