# pos_core/ledger/tests/test_ledger_bootstrap.py
import logging
from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from django.db import IntegrityError

from pos_core.common.errors import ErrorCode, ProvisioningError
from pos_core.ledger.constants import REQUIRED_ACCOUNT_CODES, AccountCode, AccountType
from pos_core.ledger.models import LedgerAccount
from pos_core.ledger.services import LedgerBootstrapService, LedgerInitResult

pytestmark = pytest.mark.django_db


def test_initialize_creates_full_catalog_in_order(workspace):
    result = LedgerBootstrapService.initialize_for_workspace(workspace_id=workspace.id)

    assert result.created == list(REQUIRED_ACCOUNT_CODES)
    assert result.existing == []
    assert result.missing_codes() == []
    assert LedgerAccount.objects.filter(workspace=workspace).count() == len(REQUIRED_ACCOUNT_CODES)

    cash = LedgerAccount.objects.get(workspace=workspace, code=AccountCode.CASH)
    assert cash.is_parent is True
    for code in (AccountCode.CASH_ON_HAND, AccountCode.BANK_MAIN, AccountCode.CLEARING_MPESA):
        assert LedgerAccount.objects.get(workspace=workspace, code=code).parent_account_id == cash.id

    assert LedgerAccount.objects.get(workspace=workspace, code=AccountCode.SALES_RETURNS).type == AccountType.INCOME
    assert LedgerAccount.objects.get(workspace=workspace, code=AccountCode.TAX_PAYABLE).type == AccountType.LIABILITY


def test_second_run_creates_nothing(workspace):
    first = LedgerBootstrapService.initialize_for_workspace(workspace_id=workspace.id)
    second = LedgerBootstrapService.initialize_for_workspace(workspace_id=workspace.id)

    assert second.created == []
    assert set(second.existing) == first.seen
    assert LedgerAccount.objects.filter(workspace=workspace).count() == len(REQUIRED_ACCOUNT_CODES)


def test_concurrent_insert_is_counted_as_existing(workspace, monkeypatch):
    # another writer already inserted SALES, but our lookup did not see it
    LedgerAccount.objects.create(
        workspace=workspace,
        code=AccountCode.SALES,
        name="Sales Revenue",
        type=AccountType.INCOME,
    )

    real_filter = LedgerAccount.objects.filter
    stale = {"pending": True}

    def stale_filter(*args, **kwargs):
        if kwargs.get("code") == AccountCode.SALES and stale["pending"]:
            stale["pending"] = False
            return real_filter(*args, **kwargs).none()
        return real_filter(*args, **kwargs)

    monkeypatch.setattr(LedgerAccount.objects, "filter", stale_filter)

    result = LedgerBootstrapService.initialize_for_workspace(workspace_id=workspace.id)

    assert AccountCode.SALES in result.existing
    assert AccountCode.SALES not in result.created
    assert result.missing_codes() == []
    # the savepoint kept the outer transaction usable for later accounts
    assert AccountCode.EXPIRY_LOSS in result.created
    assert real_filter(workspace=workspace, code=AccountCode.SALES).count() == 1


def test_unrecoverable_insert_failure_is_coded(workspace, monkeypatch, caplog):
    # SALES row exists but every lookup misses it, so the conflict cannot be resolved
    LedgerAccount.objects.create(
        workspace=workspace,
        code=AccountCode.SALES,
        name="Sales Revenue",
        type=AccountType.INCOME,
    )
    real_filter = LedgerAccount.objects.filter

    def blind_filter(*args, **kwargs):
        if kwargs.get("code") == AccountCode.SALES:
            return real_filter(*args, **kwargs).none()
        return real_filter(*args, **kwargs)

    monkeypatch.setattr(LedgerAccount.objects, "filter", blind_filter)
    caplog.set_level(logging.ERROR)

    with pytest.raises(ProvisioningError) as exc:
        LedgerBootstrapService.initialize_for_workspace(workspace_id=workspace.id)

    assert exc.value.code == ErrorCode.LEDGER_INIT_FAILED
    assert isinstance(exc.value.__cause__, IntegrityError)
    assert any(getattr(r, "component", None) == LedgerBootstrapService.COMPONENT for r in caplog.records)


def test_existing_accounts_are_repaired(workspace, caplog):
    cash = LedgerAccount.objects.create(
        workspace=workspace, code=AccountCode.CASH, name="Cash", type=AccountType.ASSET, is_parent=False
    )
    on_hand = LedgerAccount.objects.create(
        workspace=workspace, code=AccountCode.CASH_ON_HAND, name="Cash on Hand", type=AccountType.ASSET
    )
    LedgerAccount.objects.create(
        workspace=workspace, code=AccountCode.TAX_PAYABLE, name="Taxes Payable", type=AccountType.ASSET
    )

    with caplog.at_level(logging.WARNING, logger="pos_core.ledger.services"):
        result = LedgerBootstrapService.initialize_for_workspace(workspace_id=workspace.id)

    cash.refresh_from_db()
    on_hand.refresh_from_db()
    assert cash.is_parent is True
    assert on_hand.parent_account_id == cash.id
    assert set(result.existing) == {AccountCode.CASH, AccountCode.CASH_ON_HAND, AccountCode.TAX_PAYABLE}
    assert "incorrect type" in caplog.text


def test_missing_codes_reports_gaps_in_catalog_order():
    result = LedgerInitResult(created=[AccountCode.CASH], existing=[AccountCode.SALES])
    missing = result.missing_codes()

    assert missing[0] == AccountCode.CASH_ON_HAND
    assert AccountCode.CASH not in missing
    assert AccountCode.SALES not in missing
    assert len(missing) == len(REQUIRED_ACCOUNT_CODES) - 2


def test_verify_workspace_accounts(workspace):
    with pytest.raises(ProvisioningError) as exc:
        LedgerBootstrapService.verify_workspace_accounts(workspace_id=workspace.id)
    assert exc.value.code == ErrorCode.LEDGER_INCOMPLETE

    LedgerBootstrapService.initialize_for_workspace(workspace_id=workspace.id)
    LedgerBootstrapService.verify_workspace_accounts(workspace_id=workspace.id)


def test_ensure_ledger_accounts_command_backfills(workspace):
    out = StringIO()
    call_command("ensure_ledger_accounts", stdout=out)
    assert f"Newly created: {len(REQUIRED_ACCOUNT_CODES)}" in out.getvalue()

    out = StringIO()
    call_command("ensure_ledger_accounts", "--workspace", workspace.code, stdout=out)
    assert "Newly created: 0" in out.getvalue()


def test_ensure_ledger_accounts_unknown_workspace(workspace):
    with pytest.raises(CommandError):
        call_command("ensure_ledger_accounts", "--workspace", "does-not-exist")
