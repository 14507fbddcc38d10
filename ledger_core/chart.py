# Default chart of accounts, account groups and voucher numbering.
# Loaded by services.accounts.seed_chart_of_accounts().

DEFAULT_GROUPS = [
    ("Current Assets", "Asset"),
    ("Bank Account", "Asset"),
    ("Cash", "Asset"),
    ("Non-Current Assets", "Asset"),
    ("Accounts Receivable", "Asset"),
    ("Inventory", "Asset"),
    ("Tax Receivable", "Asset"),
    ("Current Liabilities", "Liability"),
    ("Non-Current Liabilities", "Liability"),
    ("Accounts Payable", "Liability"),
    ("Tax Payable", "Liability"),
    ("Equity", "Equity"),
    ("Revenue", "Income"),
    ("Other Income", "Income"),
    ("Cost of Sales", "Expense"),
    ("Operating Expenses", "Expense"),
    ("Financial Expenses", "Expense"),
    ("Discounts", "Expense"),
]

# (code, name, ac_type, group, description)
DEFAULT_ACCOUNTS = [
    ("1001", "Cash", "Asset", "Cash", "Cash and cash equivalents"),
    ("1002", "Bank Account", "Asset", "Bank Account", "Bank deposits and accounts"),
    ("1003", "Cash Sale", "Asset", "Accounts Receivable",
     "Default account for cash sales without specific customer"),
    ("1004", "Inventory", "Asset", "Inventory", "Stock of goods for sale"),
    ("1005", "GST Input / Tax Receivable", "Asset", "Tax Receivable",
     "Tax paid on purchases"),
    ("1006", "Prepaid Expenses", "Asset", "Current Assets", "Expenses paid in advance"),
    ("1007", "Undeposited Funds", "Asset", "Current Assets",
     "Cash receipts not yet deposited"),
    ("2001", "Cash Purchase", "Liability", "Accounts Payable",
     "Default account for cash purchases without specific supplier"),
    ("2002", "GST Output / Tax Payable", "Liability", "Tax Payable",
     "Tax collected on sales"),
    ("2003", "Accrued Expenses", "Liability", "Current Liabilities",
     "Expenses incurred but not paid"),
    ("3001", "Capital", "Equity", "Equity", "Owner capital"),
    ("3002", "Retained Earnings", "Equity", "Equity", "Accumulated profits"),
    ("3003", "Drawings", "Equity", "Equity", "Owner withdrawals"),
    ("3004", "Opening Balance Adjustment", "Equity", "Equity",
     "System account for opening balance auto-balancing"),
    ("4001", "Sales", "Income", "Revenue", "Product sales revenue"),
    ("4002", "Services", "Income", "Revenue", "Service revenue"),
    ("4003", "Sales Returns", "Income", "Revenue",
     "Contra revenue - goods returned by customers"),
    ("4004", "Discount Received", "Income", "Other Income",
     "Discounts received from suppliers"),
    ("5001", "Purchases", "Expense", "Cost of Sales", "Raw purchases of goods"),
    ("5002", "Cost of Goods Sold", "Expense", "Cost of Sales", "Cost of products sold"),
    ("5003", "Purchase Returns", "Expense", "Cost of Sales",
     "Contra expense - goods returned to supplier"),
    ("5004", "Operating Expenses", "Expense", "Operating Expenses",
     "General operating expenses"),
    ("5005", "Salary Expenses", "Expense", "Operating Expenses", "Employee salaries"),
    ("5006", "Bank Charges", "Expense", "Financial Expenses", "Bank fees and charges"),
    ("5007", "Discount Allowed", "Expense", "Discounts", "Discounts given to customers"),
    ("5008", "Delivery Expenses", "Expense", "Operating Expenses",
     "Shipping and delivery costs"),
    ("5009", "Rent Expense", "Expense", "Operating Expenses", "Office and shop rent"),
    ("5010", "Utilities Expense", "Expense", "Operating Expenses",
     "Electricity, water and phone"),
]

DEFAULT_SEQUENCES = [
    ("sales_invoice", "SI"),
    ("sales_return", "SR"),
    ("purchase_invoice", "PI"),
    ("purchase_return", "PR"),
    ("payment", "PAY"),
    ("receipt", "RCP"),
    ("journal", "JV"),
    ("opening_balance", "OB"),
    ("opening_stock", "OS"),
]

# System account codes the posting templates resolve by
CASH = "1001"
BANK = "1002"
INVENTORY = "1004"
TAX_RECEIVABLE = "1005"
TAX_PAYABLE = "2002"
OPENING_ADJUSTMENT = "3004"
SALES = "4001"
SALES_RETURNS = "4003"
DISCOUNT_RECEIVED = "4004"
PURCHASES = "5001"
PURCHASE_RETURNS = "5003"
DISCOUNT_ALLOWED = "5007"

CUSTOMER_CODE_PREFIX = "1003"
SUPPLIER_CODE_PREFIX = "2001"
