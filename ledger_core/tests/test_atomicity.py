from django.test import TransactionTestCase
from django.utils import timezone

from ..exceptions import MissingAccountError, UnbalancedJournalError
from ..models import (Account, JournalEntry, StockMovement, Voucher,
                      VoucherItem, VoucherSequence)
from ..services import post_voucher
from .base import JAN_10, LedgerSetupMixin


class PostingRollbackTests(LedgerSetupMixin, TransactionTestCase):
    """A failed posting leaves no rows behind and burns no number."""

    reset_sequences = True

    def assertNothingPosted(self, voucher_type):
        self.assertFalse(Voucher.objects.exists())
        self.assertFalse(VoucherItem.objects.exists())
        self.assertFalse(JournalEntry.objects.exists())
        self.assertFalse(StockMovement.objects.exists())
        seq = VoucherSequence.objects.get(voucher_type=voucher_type)
        self.assertEqual(seq.next_number, 1)

    def test_missing_tax_account_rolls_back_everything(self):
        Account.objects.filter(code="2002").update(deleted_at=timezone.now())
        with self.assertRaises(MissingAccountError):
            self.sale(tax_rate="5")
        self.assertNothingPosted("sales_invoice")

    def test_unbalanced_journal_rolls_back(self):
        with self.assertRaises(UnbalancedJournalError):
            post_voucher("journal", {
                "voucher_date": JAN_10,
                "lines": [
                    {"account_id": self.cash.pk, "debit": "100"},
                    {"account_id": self.acct("3001").pk, "credit": "90"},
                ],
            })
        self.assertNothingPosted("journal")

    def test_next_posting_reuses_the_number(self):
        Account.objects.filter(code="2002").update(deleted_at=timezone.now())
        with self.assertRaises(MissingAccountError):
            self.sale(tax_rate="5")
        Account.objects.filter(code="2002").update(deleted_at=None)

        inv = self.sale(tax_rate="5")
        self.assertEqual(inv.voucher_no, "SI-0001")
