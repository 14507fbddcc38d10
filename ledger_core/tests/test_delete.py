from django.test import TestCase

from ..models import (AuditLog, JournalEntry, PaymentAllocation,
                      StockMovement, Voucher, VoucherItem)
from ..services import (create_allocation, create_quick_payment,
                        delete_voucher, get_trial_balance, post_voucher)
from .base import JAN_10, LedgerSetupMixin


class DeleteVoucherTests(LedgerSetupMixin, TestCase):

    def test_deleting_invoice_takes_quick_receipt_along(self):
        inv = self.sale(qty="10", rate="100", tax_rate="18")
        rcp = create_quick_payment(inv.pk, "1180", self.cash.pk, JAN_10)

        delete_voucher(inv.pk)

        inv.refresh_from_db()
        rcp.refresh_from_db()
        self.assertIsNotNone(inv.deleted_at)
        self.assertIsNotNone(rcp.deleted_at)
        self.assertFalse(JournalEntry.objects.filter(voucher__in=[inv, rcp]).exists())
        self.assertFalse(StockMovement.objects.filter(voucher=inv).exists())
        self.assertFalse(PaymentAllocation.objects.exists())
        self.assertEqual(Voucher.objects.alive().count(), 0)

    def test_cascade_recomputes_other_invoices_of_the_child(self):
        inv = self.sale(qty="1", rate="100")
        other = self.sale(qty="1", rate="50")
        rcp = create_quick_payment(inv.pk, "100", self.cash.pk, JAN_10)
        # the quick receipt is edited by hand to also cover another invoice
        PaymentAllocation.objects.filter(payment_voucher=rcp).delete()
        create_allocation(rcp.pk, other.pk, "50")
        other.refresh_from_db()
        self.assertEqual(other.payment_status, "paid")

        delete_voucher(inv.pk)
        other.refresh_from_db()
        self.assertEqual(other.payment_status, "unpaid")

    def test_deleting_receipt_reopens_invoice(self):
        inv = self.sale(qty="1", rate="100")
        rcp = post_voucher("receipt", {
            "voucher_date": JAN_10,
            "party_id": self.customer.pk,
            "account_id": self.cash.pk,
            "items": [{"amount": "100"}],
            "allocations": [{"invoice_id": inv.pk, "amount": "100"}],
        })
        delete_voucher(rcp.pk)

        inv.refresh_from_db()
        self.assertEqual(inv.payment_status, "unpaid")
        self.assertFalse(PaymentAllocation.objects.exists())
        # receipts keep their journal rows as history
        self.assertTrue(JournalEntry.objects.filter(voucher=rcp).exists())

    def test_deleting_returns_and_opening_stock_removes_their_rows(self):
        vouchers = [
            self.trade("sales_return", self.customer, qty="2", rate="100"),
            self.trade("purchase_return", self.supplier, qty="1", rate="80"),
            self.trade("opening_stock", self.customer, qty="5", rate="80",
                       party_id=None),
        ]
        for voucher in vouchers:
            self.assertTrue(voucher.stock_movements.exists())
            delete_voucher(voucher.pk)

        self.assertFalse(JournalEntry.objects.filter(voucher__in=vouchers).exists())
        self.assertFalse(StockMovement.objects.filter(voucher__in=vouchers).exists())
        self.assertFalse(VoucherItem.objects.filter(voucher__in=vouchers).exists())
        self.assertEqual(Voucher.objects.deleted().count(), 3)
        self.assertEqual(get_trial_balance(JAN_10), [])

    def test_deleted_journal_keeps_rows_but_leaves_reports(self):
        jv = post_voucher("journal", {
            "voucher_date": JAN_10,
            "lines": [
                {"account_id": self.cash.pk, "debit": "75"},
                {"account_id": self.acct("3001").pk, "credit": "75"},
            ],
        })
        self.assertEqual(len(get_trial_balance(JAN_10)), 2)

        delete_voucher(jv.pk)
        self.assertEqual(JournalEntry.objects.filter(voucher=jv).count(), 2)
        self.assertEqual(get_trial_balance(JAN_10), [])

    def test_delete_twice_is_not_found(self):
        inv = self.sale()
        delete_voucher(inv.pk)
        with self.assertRaises(Voucher.DoesNotExist):
            delete_voucher(inv.pk)

    def test_delete_is_soft_and_audited(self):
        inv = self.sale()
        delete_voucher(inv.pk)
        self.assertTrue(Voucher.objects.deleted().filter(pk=inv.pk).exists())
        self.assertEqual(
            AuditLog.objects.filter(object_id=str(inv.pk), action="delete").count(), 1)
