import logging

from celery import shared_task
from django.db import models, transaction
from django.utils import timezone

logger = logging.getLogger(__name__)


@shared_task  # register this function as a Celery task
def recompute_all_snapshots(as_of=None):
    """Rebuild the balance snapshot of every account at `as_of` (default today)."""
    # import lazily to avoid circular imports at module import time
    from .models import Account, AccountBalanceSnapshot, JournalEntry
    from .services.validation import as_date

    snapshot_date = as_date(as_of, "as_of") if as_of else timezone.localdate()

    with transaction.atomic():
        # Wipe out any previous snapshots for this date
        AccountBalanceSnapshot.objects.filter(snapshot_date=snapshot_date).delete()

        count = 0
        for account in Account.objects.alive():
            # Compute agg with Sum(...) first, None means nothing was posted
            agg = (
                JournalEntry.objects.posted()
                .for_account(account)
                .in_window(to_date=snapshot_date)
                .aggregate(debit=models.Sum("debit"), credit=models.Sum("credit"))
            )
            AccountBalanceSnapshot.objects.create(
                account=account,
                snapshot_date=snapshot_date,
                debit_balance=agg["debit"] or 0,
                credit_balance=agg["credit"] or 0,
            )
            count += 1

    logger.info("rebuilt %d balance snapshots at %s", count, snapshot_date)
    return count


@shared_task
def refresh_payment_statuses():
    """Re-derive payment_status of every live invoice; returns how many changed."""
    from .models import Voucher
    from .services.payment import recompute_payment_status

    changed = 0
    for invoice in Voucher.objects.invoices().order_by("id"):
        before = invoice.payment_status
        with transaction.atomic():
            if recompute_payment_status(invoice) != before:
                changed += 1
    logger.info("payment status refresh changed %d invoices", changed)
    return changed
