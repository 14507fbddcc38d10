from decimal import Decimal
from django.db import models
from .product import Product
from .voucher import Voucher

MOVEMENT_TYPES = [
    ("IN", "In"),
    ("OUT", "Out"),
]


# Audit trail of goods in/out; read by stock reports, never balanced
class StockMovement(models.Model):
    voucher = models.ForeignKey(
        Voucher, on_delete=models.CASCADE, related_name="stock_movements")
    product = models.ForeignKey(
        Product, on_delete=models.PROTECT, related_name="stock_movements")
    movement_type = models.CharField(max_length=3, choices=MOVEMENT_TYPES)
    quantity = models.DecimalField(
        max_digits=18, decimal_places=3, default=Decimal("0.000"))
    count = models.DecimalField(
        max_digits=18, decimal_places=3, default=Decimal("0.000"))
    rate = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=["product", "movement_type"], name="stock_product_type_idx")]
        ordering = ["id"]

    def __str__(self):
        return f"{self.movement_type} {self.quantity} x {self.product_id} ({self.voucher_id})"

    @property
    def signed_quantity(self):
        return self.quantity if self.movement_type == "IN" else -self.quantity
