from django.db import models
from ..managers import SoftDeleteManager

PARTY_TYPES = [
    ("customer", "Customer"),  # receives sales invoices (AR side)
    ("supplier", "Supplier"),  # sends purchase invoices (AP side)
]


# ---------- Customer / Supplier ----------
class Party(models.Model):
    """
    A customer or supplier. Every party owns exactly one ledger Account
    (reverse accessor `party.account`), created together with the party
    by services.parties.create_party.
    """

    party_type = models.CharField(max_length=10, choices=PARTY_TYPES)
    # Optional human code ("C-001"); unique per party type when given
    code = models.CharField(max_length=32, blank=True, default="")
    name = models.CharField(max_length=200)

    # Contact details
    phone = models.CharField(max_length=50, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")
    tax_number = models.CharField(max_length=50, blank=True, default="")

    is_active = models.BooleanField(default=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SoftDeleteManager()

    class Meta:
        verbose_name_plural = "parties"
        indexes = [
            models.Index(fields=["party_type", "name"], name="party_type_name_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["party_type", "code"],
                condition=~models.Q(code=""),
                name="uq_party_type_code",
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def is_customer(self):
        return self.party_type == "customer"

    @property
    def is_supplier(self):
        return self.party_type == "supplier"

    @property
    def ledger_account(self):
        """The paired account, or None while the party is being created."""
        try:
            return self.account
        except Party.account.RelatedObjectDoesNotExist:
            return None

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
