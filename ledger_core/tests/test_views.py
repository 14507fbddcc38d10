from decimal import Decimal

import pytest
from django.urls import reverse

from ..models import Account, Voucher


def _sale_payload(seeded, qty="10", rate="100"):
    return {
        "voucher_date": "2024-01-10",
        "party_id": seeded["customer"].pk,
        "items": [{"product_id": seeded["product"].pk,
                   "initial_quantity": qty, "rate": rate}],
    }


def _post(client, name, payload, **kwargs):
    return client.post(reverse(name, kwargs=kwargs), payload,
                       content_type="application/json")


@pytest.mark.django_db
def test_post_sales_invoice(client, seeded):
    resp = _post(client, "post-voucher", _sale_payload(seeded),
                 voucher_type="sales_invoice")
    assert resp.status_code == 201
    body = resp.json()
    assert body["ok"] is True
    assert body["voucher"]["voucher_no"] == "SI-0001"
    assert body["voucher"]["grand_total"] == "1000.00"
    assert body["voucher"]["payment_status"] == "unpaid"


@pytest.mark.django_db
def test_unknown_voucher_type_is_rejected(client, seeded):
    resp = _post(client, "post-voucher", _sale_payload(seeded), voucher_type="bogus")
    assert resp.status_code == 400
    assert resp.json()["ok"] is False


@pytest.mark.django_db
def test_unbalanced_journal_is_rejected(client, seeded):
    cash = Account.objects.get(code="1001")
    capital = Account.objects.get(code="3001")
    payload = {
        "voucher_date": "2024-01-10",
        "lines": [
            {"account_id": cash.pk, "debit": "100"},
            {"account_id": capital.pk, "credit": "60"},
        ],
    }
    resp = _post(client, "post-voucher", payload, voucher_type="journal")
    assert resp.status_code == 400
    body = resp.json()
    assert body["ok"] is False
    assert "balanced" in body["error"]
    assert not Voucher.objects.exists()


@pytest.mark.django_db
def test_delete_missing_voucher(client, seeded):
    resp = client.post(reverse("delete-voucher", kwargs={"voucher_id": 9999}))
    assert resp.status_code == 404
    assert resp.json()["ok"] is False


@pytest.mark.django_db
def test_quick_payment_and_outstanding(client, seeded):
    inv_id = _post(client, "post-voucher", _sale_payload(seeded),
                   voucher_type="sales_invoice").json()["voucher"]["id"]
    cash = Account.objects.get(code="1001")

    resp = _post(client, "quick-payment",
                 {"amount": "400", "payment_account_id": cash.pk,
                  "payment_date": "2024-01-15"},
                 invoice_id=inv_id)
    assert resp.status_code == 201
    assert resp.json()["voucher"]["voucher_type"] == "receipt"

    rows = client.get(reverse("outstanding-invoices"),
                      {"type": "sales_invoice"}).json()["rows"]
    assert len(rows) == 1
    assert rows[0]["outstanding"] == "600.00"
    assert rows[0]["payment_status"] == "partially_paid"


@pytest.mark.django_db
def test_allocation_over_invoice_total(client, seeded):
    inv_id = _post(client, "post-voucher", _sale_payload(seeded),
                   voucher_type="sales_invoice").json()["voucher"]["id"]
    cash = Account.objects.get(code="1001")
    receipt_id = _post(client, "post-voucher", {
        "voucher_date": "2024-01-12",
        "party_id": seeded["customer"].pk,
        "account_id": cash.pk,
        "items": [{"amount": "1500"}],
    }, voucher_type="receipt").json()["voucher"]["id"]

    resp = _post(client, "create-allocation", {
        "payment_voucher_id": receipt_id, "invoice_voucher_id": inv_id,
        "amount": "1200"})
    assert resp.status_code == 400

    resp = _post(client, "create-allocation", {
        "payment_voucher_id": receipt_id, "invoice_voucher_id": inv_id,
        "amount": "1000"})
    assert resp.status_code == 201
    assert resp.json()["invoice_status"] == "paid"


@pytest.mark.django_db
def test_ledger_report(client, seeded):
    _post(client, "post-voucher", _sale_payload(seeded), voucher_type="sales_invoice")
    account = Account.objects.get(party=seeded["customer"])

    resp = client.get(reverse("ledger", kwargs={"account_id": account.pk}),
                      {"to": "2024-01-31"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["opening_balance"] == "0.00"
    assert [e["debit"] for e in body["entries"]] == ["1000.00"]
    assert body["closing_balance"] == "1000.00"


@pytest.mark.django_db
def test_trial_balance_report(client, seeded):
    _post(client, "post-voucher", _sale_payload(seeded), voucher_type="sales_invoice")
    rows = client.get(reverse("trial-balance"), {"to": "2024-01-31"}).json()["rows"]
    by_code = {r["account_code"]: r for r in rows}
    assert Decimal(by_code["4001"]["credit"]) == Decimal("1000")
    debit = sum(Decimal(r["debit"]) for r in rows)
    credit = sum(Decimal(r["credit"]) for r in rows)
    assert debit == credit


@pytest.mark.django_db
def test_ledger_of_unknown_account(client, seeded):
    resp = client.get(reverse("ledger", kwargs={"account_id": 9999}), {"to": "2024-01-31"})
    assert resp.status_code == 404


@pytest.mark.django_db
def test_profit_loss_and_balance_sheet(client, seeded):
    _post(client, "post-voucher", _sale_payload(seeded), voucher_type="sales_invoice")

    pl = client.get(reverse("profit-loss"), {"from": "2024-01-01", "to": "2024-01-31"}).json()
    assert Decimal(pl["net_profit"]) == Decimal("1000")

    bs = client.get(reverse("balance-sheet"), {"as_on": "2024-01-31"}).json()
    assert Decimal(bs["total_assets"]) == Decimal("1000")
    assert [r["account_code"] for r in bs["equity"]] == ["NET_PROFIT"]

    resp = client.get(reverse("balance-sheet"))
    assert resp.status_code == 400
