import datetime
from decimal import Decimal

from ..models import Account, Product
from ..services import create_party, post_voucher, seed_chart_of_accounts

JAN_10 = datetime.date(2024, 1, 10)


class LedgerSetupMixin:
    """Seeded chart, one customer, one supplier and one product."""

    def setUp(self):
        seed_chart_of_accounts()
        self.customer = create_party("customer", "Acme Traders", code="C-001")
        self.supplier = create_party("supplier", "Bulk Supplies", code="S-001")
        self.product = Product.objects.create(
            code="P-001", name="Widget",
            purchase_rate=Decimal("80.00"), sales_rate=Decimal("100.00"))
        self.cash = self.acct("1001")

    def acct(self, code):
        return Account.objects.get(code=code)

    def party_acct(self, party):
        return Account.objects.get(party=party)

    def trade(self, voucher_type, party, qty="10", rate="100", tax_rate="0",
              day=JAN_10, **extra):
        data = {
            "voucher_date": day,
            "party_id": party.pk,
            "items": [{
                "product_id": self.product.pk,
                "initial_quantity": qty,
                "rate": rate,
                "tax_rate": tax_rate,
            }],
        }
        data.update(extra)
        return post_voucher(voucher_type, data)

    def sale(self, **kwargs):
        return self.trade("sales_invoice", self.customer, **kwargs)

    def purchase(self, **kwargs):
        return self.trade("purchase_invoice", self.supplier, **kwargs)

    def journal_of(self, voucher):
        """{account code: (debit, credit)} summed per account."""
        out = {}
        for je in voucher.journal_entries.select_related("account"):
            d, c = out.get(je.account.code, (Decimal("0.00"), Decimal("0.00")))
            out[je.account.code] = (d + je.debit, c + je.credit)
        return out
