import datetime
import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils.dateparse import parse_date

from ..exceptions import MissingAccountError, UnbalancedJournalError
from ..models import Account
from .calculator import money

logger = logging.getLogger(__name__)


# ------------------------------------
# Account resolution for the templates
# ------------------------------------
def system_account(code: str) -> Account:
    try:
        return Account.objects.alive().get(code=code)
    except Account.DoesNotExist:
        raise MissingAccountError(f"System account {code} not found")


def party_account(party) -> Account:
    if party is None:
        raise MissingAccountError("Voucher has no party")
    account = party.ledger_account
    if account is None or account.deleted_at is not None:
        raise MissingAccountError(
            f"{party.get_party_type_display()} '{party.name}' has no ledger account")
    return account


def posting_account(account_id) -> Account:
    """A user-chosen account that is about to receive postings."""
    if not account_id:
        raise MissingAccountError("An account is required")
    try:
        return Account.objects.alive().get(pk=account_id)
    except Account.DoesNotExist:
        raise MissingAccountError(f"Account {account_id} not found")


# ------------------------------------
# Manual line checks (journal, opening balance)
# ------------------------------------
def clean_manual_lines(lines, require_balance=True):
    """
    Normalize user-entered debit/credit lines and validate them before any
    write happens. Returns a list of (account, debit, credit, narration).
    """
    if not lines:
        raise ValidationError("At least one line is required")

    cleaned = []
    for i, line in enumerate(lines, start=1):
        debit = money(line.get("debit"))
        credit = money(line.get("credit"))
        if debit < 0 or credit < 0:
            raise ValidationError("Debit and credit must be >= 0")
        if debit > 0 and credit > 0:
            raise ValidationError(
                "Each line cannot have both debit and credit amounts")
        if debit == 0 and credit == 0:
            raise ValidationError(
                "Each line must have either debit or credit amount")
        account = posting_account(line.get("account_id"))
        cleaned.append((account, debit, credit, line.get("narration") or ""))

    if require_balance:
        total_debit = sum((ln[1] for ln in cleaned), Decimal("0.00"))
        total_credit = sum((ln[2] for ln in cleaned), Decimal("0.00"))
        if abs(total_debit - total_credit) > settings.LEDGER_BALANCE_TOLERANCE:
            raise UnbalancedJournalError(
                "Journal entry must be balanced (debits must equal credits)")
    return cleaned


def assert_balanced(voucher):
    """Final check on the stored journal of a voucher, run before commit."""
    debit, credit = voucher.compute_totals()
    if abs(debit - credit) > settings.LEDGER_BALANCE_TOLERANCE:
        logger.error(
            "voucher %s unbalanced: debit=%s credit=%s",
            voucher.voucher_no, debit, credit)
        raise UnbalancedJournalError(
            f"Voucher {voucher.voucher_no} is unbalanced "
            f"(debit {debit}, credit {credit})")


def as_date(value, field="date"):
    """Accept a date or an ISO "YYYY-MM-DD" string."""
    if isinstance(value, datetime.date):
        return value
    parsed = None
    if isinstance(value, str):
        try:
            parsed = parse_date(value)
        except ValueError:
            parsed = None
    if parsed is None:
        raise ValidationError(f"{field} must be a date (YYYY-MM-DD), got {value!r}")
    return parsed
