# pos_core/conftest.py
import pytest
from django.contrib.auth import get_user_model

from pos_core.common import events
from pos_core.organizations.models import Organization
from pos_core.provisioning.context import Elevation, ProvisioningContext
from pos_core.provisioning.types import RegistrationInput
from pos_core.workspaces.models import Workspace, Zone


@pytest.fixture
def superuser(db):
    User = get_user_model()
    return User.objects.create_superuser(
        username="platform-admin",
        email="platform@pos.local",
        password="testpass",
    )


@pytest.fixture
def zone(db):
    return Zone.objects.create(name="Kenya")


@pytest.fixture
def ctx(superuser):
    """
    Context as RegistrationService builds it: superuser elevation, no workspace yet.
    """
    return ProvisioningContext(
        actor_user_id=superuser.id,
        elevation=Elevation(actor_user_id=superuser.id),
    )


@pytest.fixture
def registration_input():
    def _make(**overrides):
        data = {
            "company_name": "Acme Corp",
            "currency": "USD",
            "admin_first_name": "Jane",
            "admin_last_name": "Doe",
            "admin_phone_number": "0712345678",
            "store_name": "Main Store",
            "store_address": "Moi Avenue, Nairobi",
            "admin_email": None,
        }
        data.update(overrides)
        return RegistrationInput(**data)

    return _make


@pytest.fixture
def organization(db):
    return Organization.objects.create(name="Acme Corp Seller")


@pytest.fixture
def workspace(organization, zone):
    return Workspace.objects.create(
        name="Acme Corp",
        code="acme-corp",
        organization=organization,
        currency_code="USD",
        default_tax_zone=zone,
        default_shipping_zone=zone,
    )


@pytest.fixture
def captured_events():
    """
    Records published payloads per event name for the duration of a test.

        seen = captured_events("role.created", "location.assigned")
        ...
        assert seen["role.created"][0]["code"] == "acme-corp-admin"
    """
    registered = []

    def _capture(*names):
        seen = {name: [] for name in names}
        for name in names:
            def _handler(payload, _name=name):
                seen[_name].append(payload)

            events.subscribe(name)(_handler)
            registered.append((name, _handler))
        return seen

    yield _capture

    for name, handler in registered:
        events.unsubscribe(name, handler)
