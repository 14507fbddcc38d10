import logging

from django.db import transaction
from django.utils import timezone

from .. import chart
from ..exceptions import IntegrityGuardError, MissingAccountError
from ..models import Account, AccountGroup, JournalEntry, Party
from .audit_helper import log_action, snapshot
from .calculator import money

logger = logging.getLogger(__name__)

# party_type -> (account type, account group, code prefix, normal side)
PARTY_LEDGER = {
    "customer": ("Asset", "Accounts Receivable", chart.CUSTOMER_CODE_PREFIX, "Dr"),
    "supplier": ("Liability", "Accounts Payable", chart.SUPPLIER_CODE_PREFIX, "Cr"),
}
PARTY_FIELDS = ("code", "name", "phone", "email", "address", "tax_number", "is_active")
ACCOUNT_FIELDS = ("opening_balance", "opening_balance_side")


def create_party(
    party_type,
    name,
    code="",
    phone="",
    email="",
    address="",
    tax_number="",
    opening_balance=0,
    opening_balance_side=None,
    user=None,
) -> Party:
    """Create a customer/supplier together with its ledger account."""
    if party_type not in PARTY_LEDGER:
        raise ValueError(f"Unknown party type '{party_type}'")
    ac_type, group_name, prefix, side = PARTY_LEDGER[party_type]

    with transaction.atomic():
        try:
            group = AccountGroup.objects.get(name=group_name)
        except AccountGroup.DoesNotExist:
            raise MissingAccountError(
                f"Account group '{group_name}' not found; seed the chart of accounts first")

        party = Party.objects.create(
            party_type=party_type,
            name=name,
            code=code or "",
            phone=phone or "",
            email=email or "",
            address=address or "",
            tax_number=tax_number or "",
        )
        account = Account.objects.create(
            code=f"{prefix}-{party.pk}",
            name=party.name,
            ac_type=ac_type,
            group=group,
            party=party,
            opening_balance=money(opening_balance),
            opening_balance_side=opening_balance_side or side,
        )
        log_action(action="create", instance=party, user=user,
                   changes={"account": account.code, **snapshot(party)})

    logger.info("created %s %s with account %s", party_type, party.name, account.code)
    return party


def update_party(party_id, user=None, **fields) -> Party:
    unknown = set(fields) - set(PARTY_FIELDS) - set(ACCOUNT_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update party fields {sorted(unknown)}")

    with transaction.atomic():
        party = Party.objects.alive().select_for_update().get(pk=party_id)
        before = snapshot(party)
        for name in PARTY_FIELDS:
            if name in fields:
                setattr(party, name, fields[name])
        party.save()

        # keep the paired account in step
        account = party.ledger_account
        if account is not None:
            account.name = party.name
            if "opening_balance" in fields:
                account.opening_balance = money(fields["opening_balance"])
            if "opening_balance_side" in fields:
                account.opening_balance_side = fields["opening_balance_side"]
            account.save()

        log_action(action="update", instance=party, user=user,
                   changes={"before": before, "after": snapshot(party)})
    return party


def _guard(party, include_deleted_vouchers=False):
    vouchers = party.vouchers.all() if include_deleted_vouchers else party.vouchers.alive()
    if vouchers.exists():
        reason = f"Cannot delete {party.party_type} as they have associated vouchers."
    else:
        entries = JournalEntry.objects.filter(account__party=party)
        if not include_deleted_vouchers:
            entries = entries.posted()
        reason = None
        if entries.exists():
            reason = f"Cannot delete {party.party_type} as their account has ledger entries."
    if reason:
        logger.warning("refused to delete %s %s: %s", party.party_type, party.pk, reason)
        raise IntegrityGuardError(reason)


def soft_delete_party(party_id, user=None) -> Party:
    """Hide a party and its account; history stays intact."""
    with transaction.atomic():
        party = Party.objects.alive().select_for_update().get(pk=party_id)
        _guard(party)
        now = timezone.now()
        party.deleted_at = now
        party.is_active = False
        party.save(update_fields=["deleted_at", "is_active", "updated_at"])
        Account.objects.filter(party=party).update(
            deleted_at=now, is_active=False, updated_at=now)
        log_action(action="delete", instance=party, user=user)
    logger.info("soft-deleted %s %s", party.party_type, party.name)
    return party


def restore_party(party_id, user=None) -> Party:
    with transaction.atomic():
        party = Party.objects.deleted().select_for_update().get(pk=party_id)
        now = timezone.now()
        party.deleted_at = None
        party.is_active = True
        party.save(update_fields=["deleted_at", "is_active", "updated_at"])
        Account.objects.filter(party=party).update(
            deleted_at=None, is_active=True, updated_at=now)
        log_action(action="restore", instance=party, user=user)
    return party


def hard_delete_party(party_id, user=None):
    """Remove a party and its account for good. Any history blocks this."""
    with transaction.atomic():
        party = Party.objects.select_for_update().get(pk=party_id)
        _guard(party, include_deleted_vouchers=True)
        account = party.ledger_account
        if account is not None and (
                account.opening_balances.exists() or party.allocations.exists()):
            raise IntegrityGuardError(
                f"Cannot delete {party.party_type} as their account has ledger entries.")
        log_action(action="hard_delete", instance=party, user=user,
                   changes=snapshot(party))
        if account is not None:
            account.delete()
        party.delete()
    logger.info("hard-deleted party %s", party_id)
