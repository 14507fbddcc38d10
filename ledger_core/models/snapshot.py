from decimal import Decimal
from django.db import models
from .account import Account


# ---------- Account Balance Snapshot (cache rebuilt by a Celery task) ----------
class AccountBalanceSnapshot(models.Model):
    # on_delete= CASCADE: snapshots are disposable, no orphans floating around
    account = models.ForeignKey(
        Account, on_delete=models.CASCADE, related_name="snapshots")
    # The cutoff date the totals were taken at
    snapshot_date = models.DateField()
    # Hold account totals split into debit/credit buckets
    debit_balance = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    credit_balance = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    # e.g. Cash might show Debit = 10,000; Credit = 2,500,
    # a supplier account Debit = 0; Credit = 5,000

    class Meta:
        indexes = [models.Index(fields=["snapshot_date"], name="snapshot_date_idx")]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(debit_balance__gte=0) &
                    models.Q(credit_balance__gte=0)
                ),
                name="ab_snap_non_negative_amounts",
            ),
            # Do not store duplicate snapshots for the same account/date
            models.UniqueConstraint(
                fields=["account", "snapshot_date"],
                name="uq_account_snapshot_date",
            ),
        ]

    def __str__(self):
        return f"{self.snapshot_date} | {self.account.code}: D {self.debit_balance} / C {self.credit_balance}"

    @property
    def balance(self):
        return self.debit_balance - self.credit_balance
