# pos_core/ledger/constants.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from django.db import models


class AccountType(models.TextChoices):
    ASSET = "asset", "Asset"
    LIABILITY = "liability", "Liability"
    INCOME = "income", "Income"
    EXPENSE = "expense", "Expense"


class AccountCode:
    CASH = "CASH"
    CASH_ON_HAND = "CASH_ON_HAND"
    BANK_MAIN = "BANK_MAIN"
    CLEARING_MPESA = "CLEARING_MPESA"
    CLEARING_CREDIT = "CLEARING_CREDIT"
    CLEARING_GENERIC = "CLEARING_GENERIC"
    SALES = "SALES"
    SALES_RETURNS = "SALES_RETURNS"
    ACCOUNTS_RECEIVABLE = "ACCOUNTS_RECEIVABLE"
    INVENTORY = "INVENTORY"
    ACCOUNTS_PAYABLE = "ACCOUNTS_PAYABLE"
    TAX_PAYABLE = "TAX_PAYABLE"
    PURCHASES = "PURCHASES"
    EXPENSES = "EXPENSES"
    PROCESSOR_FEES = "PROCESSOR_FEES"
    CASH_SHORT_OVER = "CASH_SHORT_OVER"
    COGS = "COGS"
    INVENTORY_WRITE_OFF = "INVENTORY_WRITE_OFF"
    EXPIRY_LOSS = "EXPIRY_LOSS"


@dataclass(frozen=True)
class AccountSpec:
    code: str
    name: str
    type: str
    parent_code: Optional[str] = None
    is_parent: bool = False


# Order matters: parents first so children can link to them.
# SALES_RETURNS is contra-revenue (income with negative balance).
# CLEARING_CREDIT holds customer credit before allocation (asset).
ACCOUNT_CATALOG: Tuple[AccountSpec, ...] = (
    AccountSpec(AccountCode.CASH, "Cash", AccountType.ASSET, is_parent=True),
    AccountSpec(AccountCode.CASH_ON_HAND, "Cash on Hand", AccountType.ASSET, parent_code=AccountCode.CASH),
    AccountSpec(AccountCode.BANK_MAIN, "Bank - Main", AccountType.ASSET, parent_code=AccountCode.CASH),
    AccountSpec(AccountCode.CLEARING_MPESA, "Clearing - M-Pesa", AccountType.ASSET, parent_code=AccountCode.CASH),
    AccountSpec(AccountCode.CLEARING_CREDIT, "Clearing - Customer Credit", AccountType.ASSET),
    AccountSpec(AccountCode.CLEARING_GENERIC, "Clearing - Generic", AccountType.ASSET),
    AccountSpec(AccountCode.ACCOUNTS_RECEIVABLE, "Accounts Receivable", AccountType.ASSET),
    AccountSpec(AccountCode.INVENTORY, "Inventory", AccountType.ASSET),
    AccountSpec(AccountCode.SALES, "Sales Revenue", AccountType.INCOME),
    AccountSpec(AccountCode.SALES_RETURNS, "Sales Returns", AccountType.INCOME),
    AccountSpec(AccountCode.ACCOUNTS_PAYABLE, "Accounts Payable", AccountType.LIABILITY),
    AccountSpec(AccountCode.TAX_PAYABLE, "Taxes Payable", AccountType.LIABILITY),
    AccountSpec(AccountCode.PURCHASES, "Inventory Purchases", AccountType.EXPENSE),
    AccountSpec(AccountCode.EXPENSES, "General Expenses", AccountType.EXPENSE),
    AccountSpec(AccountCode.PROCESSOR_FEES, "Payment Processor Fees", AccountType.EXPENSE),
    AccountSpec(AccountCode.CASH_SHORT_OVER, "Cash Short/Over", AccountType.EXPENSE),
    AccountSpec(AccountCode.COGS, "Cost of Goods Sold", AccountType.EXPENSE),
    AccountSpec(AccountCode.INVENTORY_WRITE_OFF, "Inventory Write-Off", AccountType.EXPENSE),
    AccountSpec(AccountCode.EXPIRY_LOSS, "Expiry Loss", AccountType.EXPENSE),
)

REQUIRED_ACCOUNT_CODES: Tuple[str, ...] = tuple(spec.code for spec in ACCOUNT_CATALOG)

# payment handler -> ledger account used for reconciliation
PAYMENT_HANDLER_ACCOUNTS = {
    "cash": AccountCode.CASH_ON_HAND,
    "mpesa": AccountCode.CLEARING_MPESA,
}


def ledger_account_for_handler(handler: str) -> str:
    return PAYMENT_HANDLER_ACCOUNTS.get(handler, AccountCode.CLEARING_GENERIC)
