"""
Read-only ledger reports.

Sign convention everywhere: positive = Dr, negative = Cr. Journal entries
of soft-deleted vouchers never count.
"""
import logging
from decimal import Decimal

from django.conf import settings
from django.db import models

from ..models import Account, JournalEntry, Party, Voucher
from .validation import as_date

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def _sums(qs):
    agg = qs.aggregate(debit=models.Sum("debit"), credit=models.Sum("credit"))
    return agg["debit"] or ZERO, agg["credit"] or ZERO


def _with_totals(accounts, to_date, from_date=None):
    """Annotate total_debit/total_credit of posted entries inside the window."""
    window = models.Q(journal_entries__voucher__deleted_at__isnull=True,
                      journal_entries__voucher__voucher_date__lte=to_date)
    if from_date is not None:
        window &= models.Q(journal_entries__voucher__voucher_date__gte=from_date)
    return (
        accounts
        .select_related("group")
        .annotate(
            total_debit=models.Sum("journal_entries__debit", filter=window),
            total_credit=models.Sum("journal_entries__credit", filter=window),
        )
        .order_by("code")
    )


def _report_row(account, amount):
    return {
        "account_id": account.pk,
        "account_code": account.code,
        "account_name": account.name,
        "group": account.group.name if account.group else "",
        "amount": amount,
    }


def get_ledger(account_id, to_date, from_date=None) -> dict:
    """
    Running balance of one account.

    The opening figure is the account's static opening balance, plus
    (when `from_date` is given) the net of everything posted before it.
    """
    account = Account.objects.get(pk=account_id)
    to_date = as_date(to_date, "to_date")
    from_date = as_date(from_date, "from_date") if from_date else None

    posted = JournalEntry.objects.posted().for_account(account)
    opening = account.signed_opening_balance
    if from_date is not None:
        debit, credit = _sums(posted.filter(voucher__voucher_date__lt=from_date))
        opening += debit - credit

    rows = (
        posted.in_window(from_date, to_date)
        .select_related("voucher")
        .order_by("voucher__voucher_date", "voucher_id", "id")
    )

    running = opening
    entries = []
    for je in rows:
        running += je.debit - je.credit
        entries.append({
            "date": je.voucher.voucher_date,
            "voucher_id": je.voucher_id,
            "voucher_no": je.voucher.voucher_no,
            "voucher_type": je.voucher.voucher_type,
            "narration": je.narration,
            "debit": je.debit,
            "credit": je.credit,
            "balance": running,
        })

    return {
        "account_id": account.pk,
        "account_code": account.code,
        "account_name": account.name,
        "opening_balance": opening,
        "entries": entries,
        "closing_balance": running,
    }


def get_trial_balance(to_date, from_date=None) -> list:
    """
    Debit and credit totals per active account inside the window.
    Static opening balances are not folded in; only what opening-balance
    vouchers have posted shows up.
    """
    to_date = as_date(to_date, "to_date")
    from_date = as_date(from_date, "from_date") if from_date else None

    accounts = _with_totals(Account.objects.active(), to_date, from_date)

    rows = []
    for acc in accounts:
        debit = acc.total_debit or ZERO
        credit = acc.total_credit or ZERO
        if debit == 0 and credit == 0:
            continue
        rows.append({
            "account_id": acc.pk,
            "account_code": acc.code,
            "account_name": acc.name,
            "ac_type": acc.ac_type,
            "debit": debit,
            "credit": credit,
        })
    return rows


def get_profit_loss(from_date, to_date) -> dict:
    """
    Income and expense accounts over the window. Income is shown as
    credit - debit, expenses as debit - credit; accounts that net to
    (almost) nothing are left out.
    """
    from_date = as_date(from_date, "from_date")
    to_date = as_date(to_date, "to_date")
    tolerance = settings.LEDGER_BALANCE_TOLERANCE

    income, expenses = [], []
    total_income = total_expenses = ZERO
    accounts = Account.objects.alive().filter(ac_type__in=("Income", "Expense"))
    for acc in _with_totals(accounts, to_date, from_date):
        debit = acc.total_debit or ZERO
        credit = acc.total_credit or ZERO
        if acc.ac_type == "Income":
            amount = credit - debit
            if abs(amount) >= tolerance:
                total_income += amount
                income.append(_report_row(acc, amount))
        else:
            amount = debit - credit
            if abs(amount) >= tolerance:
                total_expenses += amount
                expenses.append(_report_row(acc, amount))

    return {
        "income": income,
        "expenses": expenses,
        "total_income": total_income,
        "total_expenses": total_expenses,
        "net_profit": total_income - total_expenses,
    }


def get_balance_sheet(as_on_date) -> dict:
    """
    Asset, liability and equity balances on `as_on_date`, static opening
    balances included. Amounts are signed by the section's normal side
    (assets Dr, liabilities and equity Cr). The net of all income and
    expense to date is added to equity as "Net Profit for the Period".
    """
    as_on_date = as_date(as_on_date, "as_on_date")
    tolerance = settings.LEDGER_BALANCE_TOLERANCE

    sections = {"Asset": [], "Liability": [], "Equity": []}
    totals = dict.fromkeys(sections, ZERO)
    accounts = Account.objects.alive().filter(ac_type__in=list(sections))
    for acc in _with_totals(accounts, as_on_date):
        net = acc.signed_opening_balance + (acc.total_debit or ZERO) - (acc.total_credit or ZERO)
        balance = net if acc.ac_type == "Asset" else -net
        if abs(balance) < tolerance:
            continue
        totals[acc.ac_type] += balance
        sections[acc.ac_type].append(_report_row(acc, balance))

    debit, credit = _sums(
        JournalEntry.objects.posted()
        .filter(account__ac_type__in=("Income", "Expense"))
        .in_window(to_date=as_on_date)
    )
    net_profit = credit - debit
    if net_profit != 0:
        totals["Equity"] += net_profit
        sections["Equity"].append({
            "account_id": None,
            "account_code": "NET_PROFIT",
            "account_name": "Net Profit for the Period",
            "group": "",
            "amount": net_profit,
        })

    return {
        "assets": sections["Asset"],
        "liabilities": sections["Liability"],
        "equity": sections["Equity"],
        "total_assets": totals["Asset"],
        "total_liabilities": totals["Liability"],
        "total_equity": totals["Equity"],
    }


def get_account_balance(account_id, as_of=None) -> Decimal:
    """Net posted movement (debit - credit) of an account, up to `as_of`."""
    qs = JournalEntry.objects.posted().filter(account_id=account_id)
    if as_of is not None:
        qs = qs.in_window(to_date=as_date(as_of, "as_of"))
    debit, credit = _sums(qs)
    return debit - credit


def get_day_book(from_date, to_date) -> list:
    from_date = as_date(from_date, "from_date")
    to_date = as_date(to_date, "to_date")
    rows = (
        JournalEntry.objects.posted()
        .in_window(from_date, to_date)
        .select_related("voucher", "voucher__party", "account")
        .order_by("voucher__voucher_date", "voucher_id", "id")
    )
    return [
        {
            "voucher_no": je.voucher.voucher_no,
            "voucher_type": je.voucher.voucher_type,
            "voucher_date": je.voucher.voucher_date,
            "party_name": je.voucher.party.name if je.voucher.party else None,
            "account_code": je.account.code,
            "account_name": je.account.name,
            "debit": je.debit,
            "credit": je.credit,
            "narration": je.narration,
        }
        for je in rows
    ]


def get_party_outstanding(party_type, as_on_date) -> list:
    """
    What each customer owes (or each supplier is owed) on `as_on_date`,
    read from the party's ledger account including its static opening
    balance. Figures are signed by the account's normal side, so a positive
    outstanding means "still to be settled".
    """
    as_on_date = as_date(as_on_date, "as_on_date")
    invoice_type = "sales_invoice" if party_type == "customer" else "purchase_invoice"
    tolerance = settings.LEDGER_BALANCE_TOLERANCE

    parties = (
        Party.objects.alive()
        .filter(party_type=party_type, account__isnull=False)
        .select_related("account")
        .order_by("name")
    )

    rows = []
    for party in parties:
        account = party.account
        debit, credit = _sums(
            JournalEntry.objects.posted().for_account(account)
            .in_window(to_date=as_on_date)
        )
        opening = account.opening_balance
        opening_dr = opening if account.opening_balance_side == "Dr" else ZERO
        opening_cr = opening if account.opening_balance_side == "Cr" else ZERO

        if account.ac_type == "Asset":
            charged, settled = opening_dr + debit, opening_cr + credit
        else:
            charged, settled = opening_cr + credit, opening_dr + debit
        outstanding = charged - settled
        if abs(outstanding) <= tolerance:
            continue

        invoices = Voucher.objects.invoices().filter(
            party=party, voucher_type=invoice_type, voucher_date__lte=as_on_date)
        stats = invoices.aggregate(count=models.Count("id"),
                                   oldest=models.Min("voucher_date"))
        oldest = stats["oldest"]
        rows.append({
            "party_id": party.pk,
            "party_name": party.name,
            "account_code": account.code,
            "total_invoices": stats["count"],
            "total_amount": charged,
            "paid_amount": settled,
            "outstanding_amount": outstanding,
            "oldest_invoice_date": oldest,
            "days_outstanding": (as_on_date - oldest).days if oldest else None,
        })
    return rows
