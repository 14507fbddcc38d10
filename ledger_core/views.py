import functools
import json
import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods

from .exceptions import IntegrityGuardError, UnknownVoucherTypeError
from .services import (create_allocation, create_quick_payment,
                       delete_allocation, delete_voucher, get_balance_sheet,
                       get_ledger, get_outstanding_invoices, get_profit_loss,
                       get_trial_balance, post_voucher, update_voucher)

logger = logging.getLogger(__name__)


def json_errors(view):
    """Turn service errors into {"ok": false, "error": ...} responses."""
    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except (ValidationError, UnknownVoucherTypeError) as e:
            messages = getattr(e, "messages", None) or [str(e)]
            return JsonResponse({"ok": False, "error": "; ".join(messages)}, status=400)
        except IntegrityGuardError as e:
            return JsonResponse({"ok": False, "error": str(e)}, status=409)
        except ObjectDoesNotExist as e:
            return JsonResponse({"ok": False, "error": str(e) or "Not found"}, status=404)
    return wrapper


def _body(request):
    try:
        return json.loads(request.body or b"{}")
    except ValueError:
        raise ValidationError("Request body must be JSON")


def _user(request):
    user = getattr(request, "user", None)
    return user if user is not None and user.is_authenticated else None


def _voucher_json(v):
    return {
        "id": v.pk,
        "voucher_no": v.voucher_no,
        "voucher_type": v.voucher_type,
        "voucher_date": v.voucher_date,
        "party_id": v.party_id,
        "subtotal": v.subtotal,
        "discount_amount": v.discount_amount,
        "tax_amount": v.tax_amount,
        "total_amount": v.total_amount,
        "grand_total": v.grand_total,
        "payment_status": v.payment_status,
        "deleted": v.is_deleted,
    }


# ---------- Vouchers ----------
@require_http_methods(["POST"])
@json_errors
def post_voucher_view(request, voucher_type):
    voucher = post_voucher(voucher_type, _body(request), user=_user(request))
    return JsonResponse({"ok": True, "voucher": _voucher_json(voucher)}, status=201)


@require_http_methods(["POST", "PUT"])
@json_errors
def update_voucher_view(request, voucher_id):
    voucher = update_voucher(voucher_id, _body(request), user=_user(request))
    return JsonResponse({"ok": True, "voucher": _voucher_json(voucher)})


@require_http_methods(["POST", "DELETE"])
@json_errors
def delete_voucher_view(request, voucher_id):
    voucher = delete_voucher(voucher_id, user=_user(request))
    return JsonResponse({"ok": True, "voucher": _voucher_json(voucher)})


# ---------- Allocations ----------
@require_http_methods(["POST"])
@json_errors
def create_allocation_view(request):
    data = _body(request)
    alloc = create_allocation(
        data.get("payment_voucher_id"),
        data.get("invoice_voucher_id"),
        data.get("amount"),
        allocation_date=data.get("allocation_date"),
        remarks=data.get("remarks", ""),
        user=_user(request),
    )
    alloc.invoice_voucher.refresh_from_db()
    return JsonResponse({
        "ok": True,
        "allocation_id": alloc.pk,
        "invoice_status": alloc.invoice_voucher.payment_status,
    }, status=201)


@require_http_methods(["POST", "DELETE"])
@json_errors
def delete_allocation_view(request, allocation_id):
    status = delete_allocation(allocation_id, user=_user(request))
    return JsonResponse({"ok": True, "invoice_status": status})


@require_http_methods(["POST"])
@json_errors
def quick_payment_view(request, invoice_id):
    data = _body(request)
    voucher = create_quick_payment(
        invoice_id,
        data.get("amount"),
        data.get("payment_account_id"),
        data.get("payment_date"),
        payment_method=data.get("payment_method", ""),
        reference=data.get("reference", ""),
        remarks=data.get("remarks", ""),
        user=_user(request),
    )
    return JsonResponse({"ok": True, "voucher": _voucher_json(voucher)}, status=201)


# ---------- Reports ----------
@require_GET
@json_errors
def ledger_view(request, account_id):
    report = get_ledger(account_id, request.GET.get("to"), request.GET.get("from"))
    return JsonResponse({"ok": True, **report})


@require_GET
@json_errors
def trial_balance_view(request):
    rows = get_trial_balance(request.GET.get("to"), request.GET.get("from"))
    return JsonResponse({"ok": True, "rows": rows})


@require_GET
@json_errors
def profit_loss_view(request):
    report = get_profit_loss(request.GET.get("from"), request.GET.get("to"))
    return JsonResponse({"ok": True, **report})


@require_GET
@json_errors
def balance_sheet_view(request):
    report = get_balance_sheet(request.GET.get("as_on"))
    return JsonResponse({"ok": True, **report})


@require_GET
@json_errors
def outstanding_invoices_view(request):
    rows = get_outstanding_invoices(
        party_id=request.GET.get("party") or None,
        voucher_type=request.GET.get("type") or None,
    )
    return JsonResponse({"ok": True, "rows": rows})
