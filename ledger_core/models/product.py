from decimal import Decimal
from django.db import models
from ..managers import SoftDeleteManager


class Product(models.Model):  # Something the business buys, sells and stocks
    code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=200)
    group = models.CharField(max_length=100, blank=True, default="")
    unit = models.CharField(max_length=20, blank=True, default="Pcs")

    # Default prices offered on voucher lines
    purchase_rate = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    sales_rate = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    mrp = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))

    is_active = models.BooleanField(default=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = SoftDeleteManager()

    class Meta:
        ordering = ["code"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(purchase_rate__gte=0) &
                    models.Q(sales_rate__gte=0) &
                    models.Q(mrp__gte=0)
                ),
                name="product_rates_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.code} {self.name}"

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
