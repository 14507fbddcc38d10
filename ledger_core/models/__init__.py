from .account import Account, AccountGroup
from .allocation import PaymentAllocation
from .auditlog import AuditLog
from .journal import JournalEntry
from .opening_balance import OpeningBalance
from .party import Party
from .product import Product
from .snapshot import AccountBalanceSnapshot
from .stock import StockMovement
from .voucher import Voucher, VoucherItem, VoucherSequence
