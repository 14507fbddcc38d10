from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone

from ..models import Account, JournalEntry, PaymentAllocation
from ..services import create_account, create_allocation, post_voucher
from .base import JAN_10, LedgerSetupMixin


class JournalEntryRulesTests(LedgerSetupMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.voucher = post_voucher("journal", {
            "voucher_date": JAN_10,
            "lines": [
                {"account_id": self.cash.pk, "debit": "50"},
                {"account_id": self.acct("3001").pk, "credit": "50"},
            ],
        })

    def test_line_cannot_carry_both_sides(self):
        with self.assertRaises(ValidationError):
            JournalEntry.objects.create(
                voucher=self.voucher, account=self.cash,
                debit=Decimal("1"), credit=Decimal("1"))

    def test_negative_amount_rejected(self):
        with self.assertRaises(ValidationError):
            JournalEntry.objects.create(
                voucher=self.voucher, account=self.cash, debit=Decimal("-5"))

    def test_amounts_rounded_half_up(self):
        je = JournalEntry.objects.create(
            voucher=self.voucher, account=self.cash, debit=Decimal("10.005"))
        self.assertEqual(je.debit, Decimal("10.01"))
        self.assertEqual(je.net, Decimal("10.01"))

    def test_deleted_account_takes_no_postings(self):
        acc = create_account("5104", "Travel", "Expense")
        Account.objects.filter(pk=acc.pk).update(deleted_at=timezone.now())
        acc.refresh_from_db()
        with self.assertRaises(ValidationError):
            JournalEntry.objects.create(
                voucher=self.voucher, account=acc, debit=Decimal("1"))

    def test_voucher_balance_helpers(self):
        self.assertEqual(self.voucher.compute_totals(), (Decimal("50.00"), Decimal("50.00")))
        self.assertTrue(self.voucher.is_balanced())


class VoucherRulesTests(LedgerSetupMixin, TestCase):

    def test_number_is_immutable(self):
        inv = self.sale()
        inv.voucher_no = "SI-999"
        with self.assertRaises(ValidationError):
            inv.save()

    def test_grand_total_adds_tax(self):
        inv = self.sale(tax_rate="5")
        self.assertEqual(inv.total_amount, Decimal("1000.00"))
        self.assertEqual(inv.grand_total, Decimal("1050.00"))

    def test_transition_rules(self):
        inv = self.sale()
        self.assertFalse(inv.transition_to("unpaid"))
        self.assertTrue(inv.transition_to("paid"))
        inv.refresh_from_db()
        self.assertEqual(inv.payment_status, "paid")

    def test_only_invoices_have_payment_status(self):
        jv = post_voucher("journal", {
            "voucher_date": JAN_10,
            "lines": [
                {"account_id": self.cash.pk, "debit": "5"},
                {"account_id": self.acct("3001").pk, "credit": "5"},
            ],
        })
        self.assertIsNone(jv.payment_status)
        with self.assertRaises(ValidationError):
            jv.transition_to("paid")
        jv.payment_status = "paid"
        with self.assertRaises(ValidationError):
            jv.save()


class AllocationRulesTests(LedgerSetupMixin, TestCase):

    def test_receipt_cannot_settle_purchase_invoice(self):
        bill = self.purchase()
        receipt = post_voucher("receipt", {
            "voucher_date": JAN_10,
            "party_id": self.customer.pk,
            "account_id": self.cash.pk,
            "items": [{"amount": "100"}],
        })
        with self.assertRaisesMessage(ValidationError, "cannot settle"):
            create_allocation(receipt.pk, bill.pk, "100")
        self.assertFalse(PaymentAllocation.objects.exists())

    def test_non_positive_amount_rejected(self):
        inv = self.sale()
        receipt = post_voucher("receipt", {
            "voucher_date": JAN_10,
            "party_id": self.customer.pk,
            "account_id": self.cash.pk,
            "items": [{"amount": "100"}],
        })
        for amount in ("0", "-10"):
            with self.assertRaises(ValidationError):
                create_allocation(receipt.pk, inv.pk, amount)


class AccountRulesTests(LedgerSetupMixin, TestCase):

    def test_signed_opening_balance(self):
        acc = create_account("2101", "Loan", "Liability",
                             opening_balance="250", opening_balance_side="Cr")
        self.assertEqual(acc.signed_opening_balance, Decimal("-250.00"))
        self.assertEqual(self.cash.signed_opening_balance, Decimal("0.00"))
