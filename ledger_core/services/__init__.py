from .accounts import (cash_bank_accounts, create_account, hard_delete_account,
                       restore_account, seed_chart_of_accounts,
                       soft_delete_account, update_account)
from .audit_helper import log_action
from .calculator import compute_ledger_line, compute_line, compute_voucher_totals
from .ledger import (get_account_balance, get_balance_sheet, get_day_book,
                     get_ledger, get_party_outstanding, get_profit_loss,
                     get_trial_balance)
from .parties import (create_party, hard_delete_party, restore_party,
                      soft_delete_party, update_party)
from .payment import (create_allocation, create_quick_payment,
                      delete_allocation, get_invoice_allocations,
                      get_outstanding_invoices, get_payment_allocations,
                      recompute_payment_status)
from .posting import delete_voucher, post_voucher, update_voucher
from .products import hard_delete_product, restore_product, soft_delete_product
from .sequencing import next_number
