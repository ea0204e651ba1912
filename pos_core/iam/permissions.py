# pos_core/iam/permissions.py
"""
Permission codes and static role templates.

Templates are read-only bundles for later (non-registration) role assignment.
Registration only ever uses the admin bundle.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# bump when the admin bundle changes; stored on Role.permissions_version
ADMIN_PERMISSIONS_VERSION = 1


class Perm:
    # assets
    CREATE_ASSET = "CreateAsset"
    READ_ASSET = "ReadAsset"
    UPDATE_ASSET = "UpdateAsset"
    DELETE_ASSET = "DeleteAsset"
    # catalog
    CREATE_CATALOG = "CreateCatalog"
    READ_CATALOG = "ReadCatalog"
    UPDATE_CATALOG = "UpdateCatalog"
    DELETE_CATALOG = "DeleteCatalog"
    # customers
    CREATE_CUSTOMER = "CreateCustomer"
    READ_CUSTOMER = "ReadCustomer"
    UPDATE_CUSTOMER = "UpdateCustomer"
    DELETE_CUSTOMER = "DeleteCustomer"
    # orders
    CREATE_ORDER = "CreateOrder"
    READ_ORDER = "ReadOrder"
    UPDATE_ORDER = "UpdateOrder"
    DELETE_ORDER = "DeleteOrder"
    # products
    CREATE_PRODUCT = "CreateProduct"
    READ_PRODUCT = "ReadProduct"
    UPDATE_PRODUCT = "UpdateProduct"
    DELETE_PRODUCT = "DeleteProduct"
    # stock locations
    CREATE_STOCK_LOCATION = "CreateStockLocation"
    READ_STOCK_LOCATION = "ReadStockLocation"
    UPDATE_STOCK_LOCATION = "UpdateStockLocation"
    # workspace
    READ_CHANNEL = "ReadChannel"
    READ_SETTINGS = "ReadSettings"
    UPDATE_SETTINGS = "UpdateSettings"
    # administrators
    CREATE_ADMINISTRATOR = "CreateAdministrator"
    UPDATE_ADMINISTRATOR = "UpdateAdministrator"

    # domain-specific
    OVERRIDE_PRICE = "OverridePrice"
    APPROVE_CUSTOMER_CREDIT = "ApproveCustomerCredit"
    MANAGE_CUSTOMER_CREDIT_LIMIT = "ManageCustomerCreditLimit"
    MANAGE_STOCK_ADJUSTMENTS = "ManageStockAdjustments"
    MANAGE_RECONCILIATION = "ManageReconciliation"
    CLOSE_ACCOUNTING_PERIOD = "CloseAccountingPeriod"
    MANAGE_SUPPLIER_CREDIT_PURCHASES = "ManageSupplierCreditPurchases"


CUSTOM_PERMISSIONS: Tuple[str, ...] = (
    Perm.OVERRIDE_PRICE,
    Perm.APPROVE_CUSTOMER_CREDIT,
    Perm.MANAGE_CUSTOMER_CREDIT_LIMIT,
    Perm.MANAGE_STOCK_ADJUSTMENTS,
    Perm.MANAGE_RECONCILIATION,
    Perm.CLOSE_ACCOUNTING_PERIOD,
    Perm.MANAGE_SUPPLIER_CREDIT_PURCHASES,
)

ADMIN_PERMISSIONS: Tuple[str, ...] = (
    Perm.CREATE_ASSET, Perm.READ_ASSET, Perm.UPDATE_ASSET, Perm.DELETE_ASSET,
    Perm.CREATE_CATALOG, Perm.READ_CATALOG, Perm.UPDATE_CATALOG, Perm.DELETE_CATALOG,
    Perm.CREATE_CUSTOMER, Perm.READ_CUSTOMER, Perm.UPDATE_CUSTOMER, Perm.DELETE_CUSTOMER,
    Perm.CREATE_ORDER, Perm.READ_ORDER, Perm.UPDATE_ORDER, Perm.DELETE_ORDER,
    Perm.CREATE_PRODUCT, Perm.READ_PRODUCT, Perm.UPDATE_PRODUCT, Perm.DELETE_PRODUCT,
    Perm.CREATE_STOCK_LOCATION, Perm.READ_STOCK_LOCATION, Perm.UPDATE_STOCK_LOCATION,
    Perm.READ_CHANNEL,
    Perm.READ_SETTINGS, Perm.UPDATE_SETTINGS,
    Perm.CREATE_ADMINISTRATOR, Perm.UPDATE_ADMINISTRATOR,
) + CUSTOM_PERMISSIONS

KNOWN_PERMISSIONS = frozenset(ADMIN_PERMISSIONS)


@dataclass(frozen=True)
class RoleTemplate:
    code: str
    name: str
    description: str
    permissions: Tuple[str, ...]


ROLE_TEMPLATES: Dict[str, RoleTemplate] = {
    t.code: t
    for t in (
        RoleTemplate(
            code="admin",
            name="Admin",
            description="Full system access",
            permissions=ADMIN_PERMISSIONS,
        ),
        RoleTemplate(
            code="cashier",
            name="Cashier",
            description="Payment processing and credit approval",
            permissions=(
                Perm.READ_ASSET,
                Perm.READ_CHANNEL,
                Perm.READ_ORDER,
                Perm.UPDATE_ORDER,
                Perm.READ_CUSTOMER,
                Perm.READ_PRODUCT,
                Perm.APPROVE_CUSTOMER_CREDIT,
                Perm.MANAGE_RECONCILIATION,
            ),
        ),
        RoleTemplate(
            code="accountant",
            name="Accountant",
            description="Financial oversight and reconciliation",
            permissions=(
                Perm.READ_ASSET,
                Perm.READ_CHANNEL,
                Perm.READ_ORDER,
                Perm.READ_CUSTOMER,
                Perm.READ_PRODUCT,
                Perm.MANAGE_RECONCILIATION,
                Perm.CLOSE_ACCOUNTING_PERIOD,
                Perm.MANAGE_CUSTOMER_CREDIT_LIMIT,
                Perm.MANAGE_SUPPLIER_CREDIT_PURCHASES,
            ),
        ),
        RoleTemplate(
            code="salesperson",
            name="Salesperson",
            description="Sales operations and customer management",
            permissions=(
                Perm.READ_ASSET,
                Perm.READ_CHANNEL,
                Perm.CREATE_ORDER,
                Perm.READ_ORDER,
                Perm.CREATE_CUSTOMER,
                Perm.READ_CUSTOMER,
                Perm.READ_PRODUCT,
                Perm.OVERRIDE_PRICE,
            ),
        ),
        RoleTemplate(
            code="stockkeeper",
            name="Stockkeeper",
            description="Inventory management",
            permissions=(
                Perm.READ_ASSET,
                Perm.READ_CHANNEL,
                Perm.CREATE_ASSET,
                Perm.CREATE_PRODUCT,
                Perm.READ_PRODUCT,
                Perm.UPDATE_PRODUCT,
                Perm.READ_STOCK_LOCATION,
                Perm.MANAGE_STOCK_ADJUSTMENTS,
            ),
        ),
    )
}


def get_admin_permissions() -> list[str]:
    return list(ADMIN_PERMISSIONS)


def get_role_template(code: str) -> Optional[RoleTemplate]:
    return ROLE_TEMPLATES.get(code)


def get_all_role_templates() -> list[RoleTemplate]:
    return list(ROLE_TEMPLATES.values())
