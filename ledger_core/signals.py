from django.core.exceptions import ValidationError
from django.db.models.signals import pre_delete
from django.dispatch import receiver

from .models import Account, JournalEntry, OpeningBalance


# Block deletion of the accounts the posting templates depend on.
# pre_delete signal auto-fires just before Django deletes a model instance
@receiver(pre_delete, sender=Account)
def prevent_delete_system_account(sender, instance, **kwargs):
    if instance.is_system:
        raise ValidationError(f"Cannot delete system account {instance.code}.")


# Block deletion if account has ever been used in a journal entry
@receiver(pre_delete, sender=Account)
def prevent_delete_account_with_entries(sender, instance, **kwargs):
    if JournalEntry.objects.filter(account=instance).exists():
        raise ValidationError("Cannot delete account used in journal entries.")
    if OpeningBalance.objects.filter(account=instance).exists():
        raise ValidationError("Cannot delete account with opening balances.")
