import logging

from django.db import transaction
from django.db.models import F

from ..exceptions import UnknownVoucherTypeError
from ..models import VoucherSequence

logger = logging.getLogger(__name__)


def next_number(voucher_type: str) -> str:
    """
    Issue the next human voucher number for `voucher_type` (e.g. "SI-0007").

    The counter row is locked for the rest of the caller's transaction, so
    two concurrent postings of the same type serialize here and never share
    a number. A rollback of the caller also rolls the counter back.
    """
    with transaction.atomic():
        try:
            seq = VoucherSequence.objects.select_for_update().get(
                voucher_type=voucher_type)
        except VoucherSequence.DoesNotExist:
            raise UnknownVoucherTypeError(
                f"No voucher sequence configured for '{voucher_type}'")

        number = seq.format_number(seq.next_number)
        # increment in the database, not from the value we read
        VoucherSequence.objects.filter(pk=seq.pk).update(
            next_number=F("next_number") + 1)

    logger.debug("issued voucher number %s", number)
    return number
