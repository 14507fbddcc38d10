import logging

from django.db import transaction
from django.utils import timezone

from ..exceptions import IntegrityGuardError
from ..models import Product
from .audit_helper import log_action, snapshot

logger = logging.getLogger(__name__)


def _guard(product):
    if product.voucher_items.exists() or product.stock_movements.exists():
        reason = (f"Cannot delete product {product.code} as it is used "
                  f"in vouchers or stock movements.")
        logger.warning("refused to delete product %s", product.code)
        raise IntegrityGuardError(reason)


def soft_delete_product(product_id, user=None) -> Product:
    with transaction.atomic():
        product = Product.objects.alive().select_for_update().get(pk=product_id)
        _guard(product)
        product.deleted_at = timezone.now()
        product.is_active = False
        product.save(update_fields=["deleted_at", "is_active"])
        log_action(action="delete", instance=product, user=user)
    logger.info("soft-deleted product %s", product.code)
    return product


def restore_product(product_id, user=None) -> Product:
    with transaction.atomic():
        product = Product.objects.deleted().select_for_update().get(pk=product_id)
        product.deleted_at = None
        product.is_active = True
        product.save(update_fields=["deleted_at", "is_active"])
        log_action(action="restore", instance=product, user=user)
    return product


def hard_delete_product(product_id, user=None):
    with transaction.atomic():
        product = Product.objects.select_for_update().get(pk=product_id)
        _guard(product)
        log_action(action="hard_delete", instance=product, user=user,
                   changes=snapshot(product))
        product.delete()
    logger.info("hard-deleted product %s", product_id)
