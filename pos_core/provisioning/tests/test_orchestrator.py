# pos_core/provisioning/tests/test_orchestrator.py
from unittest import mock

import pytest
from django.contrib.auth import get_user_model
from django.db import connection, transaction
from django.test.utils import CaptureQueriesContext

from pos_core.common.errors import ErrorCode, ProvisioningError
from pos_core.iam.models import AdministratorProfile, Role, UserRole
from pos_core.ledger.constants import REQUIRED_ACCOUNT_CODES
from pos_core.ledger.models import LedgerAccount
from pos_core.ledger.services import LedgerInitResult
from pos_core.locations.models import Location
from pos_core.payments.models import PaymentChannel
from pos_core.provisioning.services import orchestrator as orchestrator_module
from pos_core.provisioning.services import role as role_module
from pos_core.provisioning.services.orchestrator import TenantProvisioner
from pos_core.provisioning.types import RegistrationInput
from pos_core.provisioning.validator import RegistrationValidator, ValidatedRegistration
from pos_core.workspaces.models import Workspace

pytestmark = pytest.mark.django_db


@pytest.fixture
def mocked_steps(zone):
    """
    Every collaborator as a child of one Mock, so call order is recorded in manager.mock_calls.
    """
    manager = mock.Mock()
    manager.validator.validate_input.return_value = ValidatedRegistration(
        phone="0712345678",
        email=None,
        currency="USD",
        zone=zone,
        workspace_code="acme-corp",
    )
    manager.workspaces.create_workspace.return_value = mock.Mock(id="ws-1", code="acme-corp")
    manager.ledger.initialize_for_workspace.return_value = LedgerInitResult(created=list(REQUIRED_ACCOUNT_CODES))
    manager.identities.create_administrator.return_value = mock.Mock(id="adm-1", user_id=42)
    return manager


def _provisioner(manager, **overrides):
    kwargs = {
        "validator": manager.validator,
        "organizations": manager.organizations,
        "workspaces": manager.workspaces,
        "ledger": manager.ledger,
        "locations": manager.locations,
        "payments": manager.payments,
        "roles": manager.roles,
        "identities": manager.identities,
        "tracer": manager.tracer,
    }
    kwargs.update(overrides)
    return TenantProvisioner(**kwargs)


def _step_names(manager):
    return [name for name, _args, _kwargs in manager.mock_calls if not name.startswith("tracer")]


# ---------------------------------------------------------------------
# Ordering / fail-fast (collaborators mocked)
# ---------------------------------------------------------------------
def test_steps_run_in_order(ctx, registration_input, mocked_steps):
    result = _provisioner(mocked_steps).provision_tenant(ctx, registration_input())

    assert _step_names(mocked_steps) == [
        "validator.validate_input",
        "organizations.create_organization",
        "workspaces.create_workspace",
        "ledger.initialize_for_workspace",
        "locations.create_and_assign_location",
        "payments.create_and_assign_payment_channels",
        "roles.create_admin_role",
        "identities.create_administrator",
    ]
    assert result.workspace_id == "ws-1"
    assert result.identity_id == "42"
    mocked_steps.tracer.start_span.return_value.end.assert_called_once_with(success=True)


def test_later_steps_run_under_workspace_elevation(ctx, registration_input, mocked_steps):
    seen = {}

    def _capture(scoped_ctx, *args):
        seen["workspace_id"] = scoped_ctx.effective_workspace_id
        return mock.Mock(id="loc-1")

    mocked_steps.locations.create_and_assign_location.side_effect = _capture

    _provisioner(mocked_steps).provision_tenant(ctx, registration_input())

    assert seen["workspace_id"] == "ws-1"
    # restored once the block is left
    assert ctx.effective_workspace_id is None


def test_incomplete_ledger_stops_before_location(ctx, registration_input, mocked_steps):
    mocked_steps.ledger.initialize_for_workspace.return_value = LedgerInitResult(
        created=[c for c in REQUIRED_ACCOUNT_CODES if c != "SALES"]
    )

    with pytest.raises(ProvisioningError) as exc:
        _provisioner(mocked_steps).provision_tenant(ctx, registration_input())

    assert exc.value.code == ErrorCode.PROVISIONING_FAILED
    assert exc.value.root_code == ErrorCode.LEDGER_INCOMPLETE
    assert "Missing required accounts" in str(exc.value.__cause__)
    assert "SALES" in str(exc.value.__cause__)
    mocked_steps.locations.create_and_assign_location.assert_not_called()


def test_failure_ends_span_with_error(ctx, registration_input, mocked_steps):
    boom = ProvisioningError(ErrorCode.LOCATION_ASSIGN_FAILED, "nope")
    mocked_steps.locations.create_and_assign_location.side_effect = boom

    with pytest.raises(ProvisioningError) as exc:
        _provisioner(mocked_steps).provision_tenant(ctx, registration_input())

    assert exc.value.code == ErrorCode.PROVISIONING_FAILED
    assert exc.value.root_code == ErrorCode.LOCATION_ASSIGN_FAILED
    assert exc.value.__cause__ is boom
    mocked_steps.tracer.start_span.return_value.end.assert_called_once_with(success=False, error=boom)
    mocked_steps.payments.create_and_assign_payment_channels.assert_not_called()


def test_administrator_without_identity_is_rejected(ctx, registration_input, mocked_steps):
    mocked_steps.identities.create_administrator.return_value = mock.Mock(id="adm-1", user_id=None)

    with pytest.raises(ProvisioningError) as exc:
        _provisioner(mocked_steps).provision_tenant(ctx, registration_input())
    assert "has no linked identity" in str(exc.value.__cause__)


# ---------------------------------------------------------------------
# Missing reference zone: nothing tenant-scoped is touched
# ---------------------------------------------------------------------
def test_missing_zone_fails_before_any_tenant_read(ctx, registration_input):
    organizations = mock.Mock()
    provisioner = TenantProvisioner(validator=RegistrationValidator(), organizations=organizations)

    with CaptureQueriesContext(connection) as queries:
        with pytest.raises(ProvisioningError) as exc:
            provisioner.provision_tenant(ctx, registration_input())

    assert exc.value.root_code == ErrorCode.REFERENCE_ZONE_NOT_FOUND
    organizations.create_organization.assert_not_called()

    tenant_tables = ("workspaces_workspace", "organizations_organization", "locations_location", "iam_role")
    for query in queries.captured_queries:
        assert not any(table in query["sql"] for table in tenant_tables), query["sql"]


# ---------------------------------------------------------------------
# Full runs against the database
# ---------------------------------------------------------------------
def test_fresh_registration_provisions_everything(ctx, zone, registration_input, captured_events):
    seen = captured_events("company.registered")

    result = TenantProvisioner().provision_tenant(ctx, registration_input())

    assert all(result.as_dict().values())
    ws = Workspace.objects.get(id=result.workspace_id)
    assert ws.code.startswith("acme-corp")
    assert str(ws.organization_id) == result.organization_id
    assert ws.default_tax_zone == zone

    assert LedgerAccount.objects.filter(workspace=ws).count() == len(REQUIRED_ACCOUNT_CODES)
    assert ws.payment_channels.count() == 2
    assert [str(pk) for pk in ws.locations.values_list("id", flat=True)] == [result.location_id]

    role = Role.objects.get(id=result.role_id)
    assert role.code == f"{ws.code}-admin"
    assert list(role.workspaces.all()) == [ws]

    profile = AdministratorProfile.objects.get(id=result.administrator_id)
    assert str(profile.user_id) == result.identity_id
    assert profile.email_address == "admin.0712345678@pos.local"
    assert UserRole.objects.filter(user_id=profile.user_id, role=role).exists()

    assert len(seen["company.registered"]) == 1
    event = seen["company.registered"][0]
    assert event["company_code"] == ws.code
    assert event["admin_name"] == "Jane Doe"
    assert event["admin_phone"] == "0712345678"
    assert event["admin_email"] is None
    assert event["store_name"] == "Main Store"


def test_minimal_registration_without_admin_names(ctx, zone):
    input = RegistrationInput(
        company_name="Acme Corp",
        currency="USD",
        admin_first_name="",
        admin_last_name="",
        admin_phone_number="0712345678",
        store_name="Main Store",
    )

    result = TenantProvisioner().provision_tenant(ctx, input)

    assert all(result.as_dict().values())
    profile = AdministratorProfile.objects.get(id=result.administrator_id)
    assert (profile.first_name, profile.last_name) == ("", "")
    assert profile.email_address == "admin.0712345678@pos.local"
    assert Workspace.objects.get(id=result.workspace_id).code == "acme-corp"


def test_returning_admin_gets_second_tenant(ctx, zone, registration_input):
    first = TenantProvisioner().provision_tenant(ctx, registration_input())
    user = get_user_model().objects.get(id=first.identity_id)

    second = TenantProvisioner().provision_tenant(
        ctx,
        registration_input(company_name="Beta Traders", admin_phone_number="+254712345678"),
        existing_identity=user,
    )

    assert second.identity_id == first.identity_id
    assert second.workspace_id != first.workspace_id
    assert UserRole.objects.filter(user=user).count() == 2
    assert AdministratorProfile.objects.filter(user=user).count() == 1
    assert Workspace.objects.get(id=second.workspace_id).code == "beta-traders"


def test_role_link_failure_stops_before_identity(ctx, zone, registration_input, monkeypatch):
    monkeypatch.setattr(role_module, "role_workspace_ids", lambda role_id: [])
    identities = mock.Mock()

    with pytest.raises(ProvisioningError) as exc:
        TenantProvisioner(identities=identities).provision_tenant(ctx, registration_input())

    assert exc.value.root_code == ErrorCode.ROLE_ASSIGN_FAILED
    identities.create_administrator.assert_not_called()


def test_locations_and_channels_only_after_ledger(ctx, zone, registration_input):
    def _empty_ledger(*, workspace_id):
        return LedgerInitResult()

    ledger = mock.Mock()
    ledger.initialize_for_workspace.side_effect = _empty_ledger

    with pytest.raises(ProvisioningError):
        TenantProvisioner(ledger=ledger).provision_tenant(ctx, registration_input())

    assert not Location.objects.exists()
    assert not PaymentChannel.objects.exists()


@pytest.mark.django_db(transaction=True)
def test_requires_surrounding_transaction(ctx, zone, registration_input):
    assert not transaction.get_connection().in_atomic_block

    with pytest.raises(ProvisioningError) as exc:
        TenantProvisioner().provision_tenant(ctx, registration_input())

    assert exc.value.root_code == ErrorCode.TRANSACTION_REQUIRED
    assert not Workspace.objects.exists()


def test_orchestrator_logs_each_step(ctx, registration_input, mocked_steps, caplog):
    caplog.set_level("INFO", logger=orchestrator_module.__name__)

    _provisioner(mocked_steps).provision_tenant(ctx, registration_input())

    steps = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Step ")]
    assert len(steps) == orchestrator_module.TOTAL_STEPS
