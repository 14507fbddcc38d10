from django.test import TestCase

from ..exceptions import UnknownVoucherTypeError
from ..models import VoucherSequence
from ..services import next_number, seed_chart_of_accounts


class VoucherNumberTests(TestCase):
    def setUp(self):
        seed_chart_of_accounts()

    def test_numbers_are_prefixed_padded_and_consecutive(self):
        self.assertEqual(next_number("sales_invoice"), "SI-0001")
        self.assertEqual(next_number("sales_invoice"), "SI-0002")
        # counters are per type
        self.assertEqual(next_number("receipt"), "RCP-0001")
        seq = VoucherSequence.objects.get(voucher_type="sales_invoice")
        self.assertEqual(seq.next_number, 3)

    def test_padding_is_configurable(self):
        VoucherSequence.objects.filter(voucher_type="journal").update(
            padding=6, next_number=42)
        self.assertEqual(next_number("journal"), "JV-000042")

    def test_unknown_type_is_a_configuration_error(self):
        with self.assertRaises(UnknownVoucherTypeError):
            next_number("credit_note")

    def test_seeding_is_idempotent(self):
        next_number("payment")
        created = seed_chart_of_accounts()
        self.assertEqual(created, {"groups": 0, "accounts": 0, "sequences": 0})
        # an existing counter is not reset
        self.assertEqual(next_number("payment"), "PAY-0002")
