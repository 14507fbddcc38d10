import logging

from django.db import transaction
from django.utils import timezone

from .. import chart
from ..exceptions import IntegrityGuardError
from ..models import Account, AccountGroup, VoucherSequence
from .audit_helper import log_action, snapshot
from .calculator import money

logger = logging.getLogger(__name__)

# Fields a caller may change through update_account
EDITABLE_FIELDS = (
    "code", "name", "ac_type", "group_id", "description",
    "opening_balance", "opening_balance_side", "is_active",
)
CASH_BANK_GROUPS = ("Cash", "Bank Account")


# ----------------------------
# Chart of accounts seeding
# ----------------------------
def seed_chart_of_accounts() -> dict:
    """Create default groups, system accounts and voucher sequences. Idempotent."""
    created = {"groups": 0, "accounts": 0, "sequences": 0}
    with transaction.atomic():
        groups = {}
        for name, ac_type in chart.DEFAULT_GROUPS:
            group, is_new = AccountGroup.objects.get_or_create(
                name=name, defaults={"ac_type": ac_type})
            groups[name] = group
            created["groups"] += int(is_new)

        for code, name, ac_type, group_name, description in chart.DEFAULT_ACCOUNTS:
            _, is_new = Account.objects.get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "ac_type": ac_type,
                    "group": groups[group_name],
                    "description": description,
                    "is_system": True,
                },
            )
            created["accounts"] += int(is_new)

        for voucher_type, prefix in chart.DEFAULT_SEQUENCES:
            _, is_new = VoucherSequence.objects.get_or_create(
                voucher_type=voucher_type, defaults={"prefix": prefix})
            created["sequences"] += int(is_new)

    logger.info("chart of accounts seeded: %s", created)
    return created


def cash_bank_accounts():
    """Accounts a payment can be made from or a receipt paid into."""
    return Account.objects.active().filter(group__name__in=CASH_BANK_GROUPS)


# ----------------------------
# Account CRUD
# ----------------------------
def create_account(
    code,
    name,
    ac_type,
    group_id=None,
    description="",
    opening_balance=0,
    opening_balance_side="Dr",
    user=None,
) -> Account:
    """
    Add a user account. The opening balance is stored on the account only;
    to see it in the trial balance, post an opening_balance voucher.
    """
    with transaction.atomic():
        account = Account.objects.create(
            code=code,
            name=name,
            ac_type=ac_type,
            group_id=group_id,
            description=description or "",
            opening_balance=money(opening_balance),
            opening_balance_side=opening_balance_side,
        )
        log_action(action="create", instance=account, user=user,
                   changes=snapshot(account))
    logger.info("created account %s", account.code)
    return account


def update_account(account_id, user=None, **fields) -> Account:
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update account fields {sorted(unknown)}")

    with transaction.atomic():
        account = Account.objects.alive().select_for_update().get(pk=account_id)
        before = snapshot(account)
        if "opening_balance" in fields:
            fields["opening_balance"] = money(fields["opening_balance"])
        for name, value in fields.items():
            setattr(account, name, value)
        account.save()  # system-account locks are enforced in Account.clean
        log_action(action="update", instance=account, user=user,
                   changes={"before": before, "after": snapshot(account)})
    return account


def _deletion_blocker(account):
    """Reason the account cannot be removed, or None."""
    if account.is_system:
        return f"Cannot delete system account {account.code}."
    if account.journal_entries.exists():
        return f"Cannot delete account {account.code} as it has ledger entries."
    if account.opening_balances.exists():
        return f"Cannot delete account {account.code} as it has opening balances."
    if account.voucher_items.exists() or account.settlement_vouchers.exists():
        return f"Cannot delete account {account.code} as vouchers refer to it."
    if account.party_id and account.party.deleted_at is None:
        return (f"Account {account.code} belongs to {account.party.name}; "
                f"delete the {account.party.party_type} instead.")
    return None


def _guard(account):
    reason = _deletion_blocker(account)
    if reason:
        logger.warning("refused to delete account %s: %s", account.code, reason)
        raise IntegrityGuardError(reason)


def soft_delete_account(account_id, user=None) -> Account:
    with transaction.atomic():
        account = Account.objects.alive().select_for_update().get(pk=account_id)
        _guard(account)
        account.deleted_at = timezone.now()
        account.is_active = False
        account.save(update_fields=["deleted_at", "is_active", "updated_at"])
        log_action(action="delete", instance=account, user=user)
    logger.info("soft-deleted account %s", account.code)
    return account


def restore_account(account_id, user=None) -> Account:
    with transaction.atomic():
        account = Account.objects.deleted().select_for_update().get(pk=account_id)
        if account.party_id and account.party.deleted_at is not None:
            raise IntegrityGuardError(
                f"Restore {account.party.name} to restore account {account.code}.")
        account.deleted_at = None
        account.is_active = True
        account.save(update_fields=["deleted_at", "is_active", "updated_at"])
        log_action(action="restore", instance=account, user=user)
    return account


def hard_delete_account(account_id, user=None):
    with transaction.atomic():
        account = Account.objects.select_for_update().get(pk=account_id)
        _guard(account)
        log_action(action="hard_delete", instance=account, user=user,
                   changes=snapshot(account))
        account.delete()
    logger.info("hard-deleted account %s", account_id)
