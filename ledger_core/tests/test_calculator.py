from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from ..services.calculator import (compute_ledger_line, compute_line,
                                   compute_voucher_totals)


def test_simple_line_with_tax():
    line = compute_line(initial_quantity="10", rate="100", tax_rate="18")
    assert line.final_quantity == Decimal("10.000")
    assert line.amount == Decimal("1000.00")
    assert line.discount_amount == Decimal("0.00")
    assert line.tax_amount == Decimal("180.00")


def test_deduction_reduces_final_quantity():
    # 100 kg in 10 bags, 0.5 kg shrink per bag
    line = compute_line(initial_quantity="100", count="10",
                        deduction_per_unit="0.5", rate="20")
    assert line.final_quantity == Decimal("95.000")
    assert line.amount == Decimal("1900.00")


def test_discount_percent_wins_over_fixed_amount():
    line = compute_line(initial_quantity="10", rate="100",
                        discount_percent="10", discount_amount="999", tax_rate="10")
    assert line.discount_amount == Decimal("100.00")
    assert line.taxable_amount == Decimal("900.00")
    assert line.tax_amount == Decimal("90.00")


def test_fixed_discount_used_without_percent():
    line = compute_line(initial_quantity="1", rate="250", discount_amount="25")
    assert line.discount_amount == Decimal("25.00")
    assert line.taxable_amount == Decimal("225.00")


def test_negative_final_quantity_is_kept():
    line = compute_line(initial_quantity="1", count="2", deduction_per_unit="1", rate="10")
    assert line.final_quantity == Decimal("-1.000")
    assert line.amount == Decimal("-10.00")


def test_rounding_is_half_up():
    line = compute_line(initial_quantity="1", rate="10.05", tax_rate="5")
    # 10.05 * 5% = 0.5025 -> 0.50
    assert line.tax_amount == Decimal("0.50")
    line = compute_line(initial_quantity="1", rate="0.10", tax_rate="5")
    # 0.005 -> 0.01
    assert line.tax_amount == Decimal("0.01")


def test_ledger_line_charges_tax_on_top():
    line = compute_ledger_line("1000", "18")
    assert line.amount == Decimal("1000.00")
    assert line.tax_amount == Decimal("180.00")


def test_voucher_totals_subtotal_is_net_of_line_discounts():
    lines = [
        compute_line(initial_quantity="10", rate="100", discount_percent="10", tax_rate="10"),
        compute_line(initial_quantity="1", rate="100"),
    ]
    totals = compute_voucher_totals(lines, discount_amount="50")
    assert totals.subtotal == Decimal("1000.00")
    assert totals.discount_amount == Decimal("50.00")
    assert totals.tax_amount == Decimal("90.00")
    assert totals.total_amount == Decimal("950.00")
    assert totals.grand_total == Decimal("1040.00")


def test_voucher_discount_rate_wins():
    lines = [compute_line(initial_quantity="10", rate="100")]
    totals = compute_voucher_totals(lines, discount_rate="5", discount_amount="300")
    assert totals.discount_amount == Decimal("50.00")
    assert totals.total_amount == Decimal("950.00")


def test_garbage_number_is_a_validation_error():
    with pytest.raises(ValidationError):
        compute_line(initial_quantity="ten", rate="1")
