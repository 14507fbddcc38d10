import datetime
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from ledger_core.models import Account, Product
from ledger_core.services import (create_party, create_quick_payment,
                                  post_voucher, seed_chart_of_accounts)


class Command(BaseCommand):
    help = "Seeds the database with a small demo book: parties, products and a few vouchers."

    # Define command-line argument
    def add_arguments(self, parser):
        parser.add_argument(
            "--date",  # Define flag
            type=str,
            default=None,
            help="Voucher date for the demo postings (YYYY-MM-DD, default: today)",
        )

    def handle(self, *args, **options):
        day = (datetime.date.fromisoformat(options["date"])
               if options["date"] else datetime.date.today())

        self.stdout.write(self.style.NOTICE("Seeding demo data..."))
        with transaction.atomic():
            seed_chart_of_accounts()
            cash = Account.objects.get(code="1001")
            capital = Account.objects.get(code="3001")

            customer = create_party("customer", "Demo Customer", code="C-001")
            supplier = create_party("supplier", "Demo Supplier", code="S-001")
            rice, _ = Product.objects.get_or_create(
                code="P-001",
                defaults={"name": "Rice", "unit": "Kg",
                          "purchase_rate": Decimal("40.00"), "sales_rate": Decimal("55.00")},
            )

            post_voucher("opening_balance", {
                "voucher_date": day,
                "lines": [
                    {"account_id": cash.pk, "debit": "50000", "narration": "Cash in hand"},
                    {"account_id": capital.pk, "credit": "50000", "narration": "Owner capital"},
                ],
            })
            purchase = post_voucher("purchase_invoice", {
                "voucher_date": day,
                "party_id": supplier.pk,
                "items": [{"product_id": rice.pk, "initial_quantity": "500",
                           "count": "10", "deduction_per_unit": "0.5",
                           "rate": "40", "tax_rate": "5"}],
            })
            sale = post_voucher("sales_invoice", {
                "voucher_date": day,
                "party_id": customer.pk,
                "items": [{"product_id": rice.pk, "initial_quantity": "200",
                           "rate": "55", "tax_rate": "5"}],
            })
            create_quick_payment(sale.pk, sale.grand_total, cash.pk, day,
                                 payment_method="cash")
            create_quick_payment(purchase.pk, Decimal("5000.00"), cash.pk, day,
                                 payment_method="cash")

        self.stdout.write(self.style.SUCCESS("Demo data seeded successfully!"))
