from decimal import Decimal
from django.db import models
from .account import Account
from .voucher import Voucher


# One row per user line of an opening-balance voucher.
# Its presence pins the account: it can no longer be deleted.
class OpeningBalance(models.Model):
    account = models.ForeignKey(
        Account, on_delete=models.PROTECT, related_name="opening_balances")
    voucher = models.ForeignKey(
        Voucher, null=True, blank=True, on_delete=models.CASCADE,
        related_name="opening_balances")
    opening_debit = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    opening_credit = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    financial_year = models.PositiveSmallIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=["account", "financial_year"], name="ob_account_year_idx")]

    def __str__(self):
        return f"{self.account.code} {self.financial_year}: D {self.opening_debit} / C {self.opening_credit}"
