from decimal import ROUND_HALF_UP, Decimal
from django.core.exceptions import ValidationError
from django.db import models
from ..managers import JournalEntryQuerySet
from .account import Account
from .voucher import Voucher


# ---------- JournalEntry (one debit-or-credit line of a voucher) ----------
class JournalEntry(models.Model):
    """
    Each entry belongs to a voucher and to a ledger account.
    is_manual marks user-entered journal lines; everything else is derived
    from the voucher by the posting templates and regenerated on edit.
    """

    voucher = models.ForeignKey(
        Voucher,
        on_delete=models.CASCADE,
        related_name="journal_entries",
    )
    # Must point to one Account (can't delete account if entries exist → PROTECT)
    account = models.ForeignKey(
        Account, on_delete=models.PROTECT, related_name="journal_entries")

    debit = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    credit = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))

    is_manual = models.BooleanField(default=False)
    narration = models.CharField(max_length=400, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    objects = JournalEntryQuerySet.as_manager()

    class Meta:
        verbose_name_plural = "journal entries"
        # For fast queries like "all entries for this account" /
        # "all entries of this voucher"
        indexes = [
            models.Index(fields=["account", "voucher"], name="je_account_voucher_idx"),
        ]
        ordering = ["id"]
        constraints = [
            # Enforce debits and credits must be non-negative
            models.CheckConstraint(
                condition=models.Q(debit__gte=0) & models.Q(credit__gte=0),
                name="je_non_negative_amounts",
            ),
            # Never both sides on one line
            models.CheckConstraint(
                condition=~(models.Q(debit__gt=0) & models.Q(credit__gt=0)),
                name="je_not_both_sides",
            ),
        ]

    # Show voucher, account, and amounts in debug logs
    def __str__(self):
        vid = self.voucher_id
        acc = self.account.code
        acn = self.account.name
        return f"{vid} | {acc} {acn} | D:{self.debit} C:{self.credit}"

    @property
    def net(self):
        """Signed effect on the account: positive = Dr."""
        return self.debit - self.credit

    def clean(self):
        # Ensure no negative values sneak in
        # (redundant with CheckConstraint but useful at app-level)
        if self.debit < 0 or self.credit < 0:
            raise ValidationError("Debit and credit must be >= 0")
        if self.debit > 0 and self.credit > 0:
            raise ValidationError(
                "Each line cannot have both debit and credit amounts")
        if self.is_manual and self.debit == 0 and self.credit == 0:
            raise ValidationError(
                "Each line must have either debit or credit amount")
        # Deleted accounts take no new postings
        if self.account_id and self.account.deleted_at is not None:
            raise ValidationError(
                f"Account {self.account.code} is deleted and cannot be posted to.")

    def save(self, *args, **kwargs):
        # round to 2 decimal places before validating
        self.debit = Decimal(self.debit).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP)
        self.credit = Decimal(self.credit).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP)
        self.full_clean()
        return super().save(*args, **kwargs)
