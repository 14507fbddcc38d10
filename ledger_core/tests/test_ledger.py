import datetime
from decimal import Decimal

from django.test import TestCase

from ..services import (create_party, create_quick_payment, delete_voucher,
                        get_account_balance, get_balance_sheet, get_day_book,
                        get_ledger, get_party_outstanding, get_profit_loss,
                        get_trial_balance, post_voucher)
from .base import LedgerSetupMixin

D = Decimal


def day(n):
    return datetime.date(2024, 1, n)


class LedgerTests(LedgerSetupMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.buyer = create_party("customer", "Opening Co", opening_balance="100")
        self.account = self.party_acct(self.buyer)
        # posted out of date order on purpose
        for d, rate in ((10, "200"), (5, "50"), (20, "300")):
            self.trade("sales_invoice", self.buyer, qty="1", rate=rate, day=day(d))
        post_voucher("receipt", {
            "voucher_date": day(5),
            "party_id": self.buyer.pk,
            "account_id": self.cash.pk,
            "items": [{"amount": "30"}],
        })

    def test_entries_are_ordered_by_date_then_voucher(self):
        ledger = get_ledger(self.account.pk, to_date=day(31))
        keys = [(e["date"], e["voucher_id"]) for e in ledger["entries"]]
        self.assertEqual(keys, sorted(keys))
        self.assertEqual(len(keys), 4)

    def test_closing_is_opening_plus_movements(self):
        ledger = get_ledger(self.account.pk, to_date=day(31))
        self.assertEqual(ledger["opening_balance"], D("100.00"))
        net = sum((e["debit"] - e["credit"] for e in ledger["entries"]), D("0"))
        self.assertEqual(ledger["closing_balance"], ledger["opening_balance"] + net)
        self.assertEqual(ledger["closing_balance"], D("620.00"))
        self.assertEqual(ledger["entries"][-1]["balance"], ledger["closing_balance"])

    def test_from_date_carries_earlier_movements_forward(self):
        ledger = get_ledger(self.account.pk, to_date=day(15), from_date=day(6))
        # 100 static + 50 invoice - 30 receipt, both on the 5th
        self.assertEqual(ledger["opening_balance"], D("120.00"))
        self.assertEqual([e["debit"] for e in ledger["entries"]], [D("200.00")])
        self.assertEqual(ledger["closing_balance"], D("320.00"))

    def test_credit_side_opening_balance_is_negative(self):
        vendor = create_party("supplier", "Old Vendor", opening_balance="40")
        ledger = get_ledger(self.party_acct(vendor).pk, to_date=day(31))
        self.assertEqual(ledger["opening_balance"], D("-40.00"))
        self.assertEqual(ledger["entries"], [])

    def test_account_balance_ignores_static_opening(self):
        self.assertEqual(get_account_balance(self.account.pk), D("520.00"))
        self.assertEqual(get_account_balance(self.account.pk, as_of=day(9)), D("20.00"))

    def test_trial_balance_balances_and_skips_idle_accounts(self):
        rows = get_trial_balance(to_date=day(31))
        codes = [r["account_code"] for r in rows]
        self.assertEqual(codes, sorted(codes))
        self.assertIn("4001", codes)
        self.assertNotIn("5001", codes)
        self.assertEqual(sum(r["debit"] for r in rows), sum(r["credit"] for r in rows))

    def test_trial_balance_window(self):
        rows = {r["account_code"]: r for r in get_trial_balance(day(31), from_date=day(6))}
        self.assertEqual(rows["4001"]["credit"], D("500.00"))
        self.assertNotIn("1001", rows)

    def test_day_book(self):
        rows = get_day_book(day(5), day(5))
        self.assertEqual(len(rows), 4)
        self.assertEqual({r["party_name"] for r in rows}, {"Opening Co"})
        self.assertEqual(sum(r["debit"] for r in rows), sum(r["credit"] for r in rows))


class PartyOutstandingTests(LedgerSetupMixin, TestCase):

    def test_outstanding_per_customer(self):
        inv = self.sale(qty="10", rate="100", tax_rate="18", day=day(3))
        create_quick_payment(inv.pk, "500", self.cash.pk, day(4))
        create_party("customer", "Idle Customer")

        rows = get_party_outstanding("customer", day(10))
        self.assertEqual(len(rows), 1)
        row = rows[0]
        self.assertEqual(row["party_id"], self.customer.pk)
        self.assertEqual(row["total_amount"], D("1180.00"))
        self.assertEqual(row["paid_amount"], D("500.00"))
        self.assertEqual(row["outstanding_amount"], D("680.00"))
        self.assertEqual(row["total_invoices"], 1)
        self.assertEqual(row["days_outstanding"], 7)

    def test_supplier_outstanding_counts_credit_opening(self):
        create_party("supplier", "Old Vendor", opening_balance="250")
        rows = get_party_outstanding("supplier", day(10))
        self.assertEqual([r["outstanding_amount"] for r in rows], [D("250.00")])
        self.assertIsNone(rows[0]["oldest_invoice_date"])


class FinancialStatementTests(LedgerSetupMixin, TestCase):

    def setUp(self):
        super().setUp()
        post_voucher("journal", {
            "voucher_date": day(2),
            "lines": [
                {"account_id": self.cash.pk, "debit": "5000"},
                {"account_id": self.acct("3001").pk, "credit": "5000"},
            ],
        })
        self.trade("purchase_invoice", self.supplier, qty="10", rate="80", day=day(5))
        self.trade("sales_invoice", self.customer, qty="10", rate="100", day=day(10))

    def test_profit_loss(self):
        pl = get_profit_loss(day(1), day(31))
        self.assertEqual([(r["account_code"], r["amount"]) for r in pl["income"]],
                         [("4001", D("1000.00"))])
        self.assertEqual([(r["account_code"], r["amount"]) for r in pl["expenses"]],
                         [("5001", D("800.00"))])
        self.assertEqual(pl["income"][0]["group"], "Revenue")
        self.assertEqual(pl["net_profit"], D("200.00"))

    def test_profit_loss_window_and_deleted_vouchers(self):
        pl = get_profit_loss(day(6), day(31))
        self.assertEqual(pl["total_expenses"], D("0.00"))
        self.assertEqual(pl["net_profit"], D("1000.00"))

        delete_voucher(self.trade("sales_invoice", self.customer, qty="1",
                                  rate="100", day=day(12)).pk)
        self.assertEqual(get_profit_loss(day(1), day(31))["total_income"], D("1000.00"))

    def test_balance_sheet_balances(self):
        bs = get_balance_sheet(day(31))
        assets = {r["account_code"]: r["amount"] for r in bs["assets"]}
        self.assertEqual(assets, {
            "1001": D("5000.00"),
            self.party_acct(self.customer).code: D("1000.00"),
        })
        self.assertEqual(bs["total_liabilities"], D("800.00"))
        equity = {r["account_code"]: r["amount"] for r in bs["equity"]}
        self.assertEqual(equity, {"3001": D("5000.00"), "NET_PROFIT": D("200.00")})
        self.assertEqual(bs["total_assets"], bs["total_liabilities"] + bs["total_equity"])

    def test_balance_sheet_as_on_date(self):
        bs = get_balance_sheet(day(3))
        self.assertEqual(bs["total_assets"], D("5000.00"))
        self.assertEqual(bs["liabilities"], [])
        self.assertEqual([r["account_code"] for r in bs["equity"]], ["3001"])
