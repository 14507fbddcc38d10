from django.urls import path

from ledger_core import views

urlpatterns = [
    path("vouchers/<str:voucher_type>/", views.post_voucher_view, name="post-voucher"),
    path("vouchers/<int:voucher_id>/update/", views.update_voucher_view, name="update-voucher"),
    path("vouchers/<int:voucher_id>/delete/", views.delete_voucher_view, name="delete-voucher"),
    path("allocations/", views.create_allocation_view, name="create-allocation"),
    path("allocations/<int:allocation_id>/delete/", views.delete_allocation_view,
         name="delete-allocation"),
    path("invoices/<int:invoice_id>/quick-payment/", views.quick_payment_view,
         name="quick-payment"),
    path("reports/ledger/<int:account_id>/", views.ledger_view, name="ledger"),
    path("reports/trial-balance/", views.trial_balance_view, name="trial-balance"),
    path("reports/profit-loss/", views.profit_loss_view, name="profit-loss"),
    path("reports/balance-sheet/", views.balance_sheet_view, name="balance-sheet"),
    path("reports/outstanding-invoices/", views.outstanding_invoices_view,
         name="outstanding-invoices"),
]
