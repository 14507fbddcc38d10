from django.db import models

# -----------------------------------------
# Soft-delete aware querysets shared by the
# master records (accounts, parties, products)
# and by vouchers
# -----------------------------------------
class SoftDeleteQuerySet(models.QuerySet):
    def alive(self):                        # rows that were never soft-deleted
        return self.filter(deleted_at__isnull=True)

    def deleted(self):                      # the "recycle bin"
        return self.filter(deleted_at__isnull=False)

    def active(self):
        return self.filter(
                            deleted_at__isnull=True,  # not soft-deleted
                            is_active=True            # and not switched off
                        )
    # Enables query:
    # Account.objects.active().order_by("code")


# Attach SoftDeleteQuerySet to .objects
class SoftDeleteManager(models.Manager):

    def get_queryset(self):  # every model gets SoftDeleteQuerySet (so .alive() is always available)
        return SoftDeleteQuerySet(self.model, using=self._db)

    def alive(self):
        return self.get_queryset().alive()

    def deleted(self):
        return self.get_queryset().deleted()

    def active(self):
        return self.get_queryset().active()


class VoucherQuerySet(SoftDeleteQuerySet):
    # Vouchers carry no is_active flag, "active" means not deleted
    def active(self):
        return self.alive()

    def of_type(self, *voucher_types):
        return self.filter(voucher_type__in=voucher_types)

    def invoices(self):
        from .models.voucher import INVOICE_TYPES

        return self.alive().filter(voucher_type__in=INVOICE_TYPES)


class VoucherManager(SoftDeleteManager):
    def get_queryset(self):
        return VoucherQuerySet(self.model, using=self._db)

    def of_type(self, *voucher_types):
        return self.get_queryset().of_type(*voucher_types)

    def invoices(self):
        return self.get_queryset().invoices()


# Journal entries only count while their voucher is alive
class JournalEntryQuerySet(models.QuerySet):
    def posted(self):
        return self.filter(voucher__deleted_at__isnull=True)

    def for_account(self, account):
        return self.filter(account=account)

    def in_window(self, from_date=None, to_date=None):
        qs = self
        if from_date is not None:
            qs = qs.filter(voucher__voucher_date__gte=from_date)
        if to_date is not None:
            qs = qs.filter(voucher__voucher_date__lte=to_date)
        return qs
