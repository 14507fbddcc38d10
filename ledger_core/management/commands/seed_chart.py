from django.core.management.base import BaseCommand

from ledger_core.services import seed_chart_of_accounts


class Command(BaseCommand):
    help = "Seeds account groups, the system chart of accounts and voucher sequences."

    def handle(self, *args, **options):
        created = seed_chart_of_accounts()
        self.stdout.write(self.style.SUCCESS(
            f"Chart seeded: {created['groups']} groups, {created['accounts']} accounts, "
            f"{created['sequences']} sequences created."
        ))
