import pytest
from rest_framework.exceptions import ValidationError

from pos_core.organizations.services import OrganizationService, organization_display_name

pytestmark = pytest.mark.django_db


def test_display_name():
    assert organization_display_name("  Acme Corp ") == "Acme Corp Seller"


def test_create_publishes_event(captured_events):
    seen = captured_events("organization.created")

    org = OrganizationService.create(name=" Acme Corp Seller ", metadata={"company_name": "Acme Corp"})

    assert org.name == "Acme Corp Seller"
    assert org.metadata == {"company_name": "Acme Corp"}
    assert seen["organization.created"] == [{"organization_id": str(org.id), "name": "Acme Corp Seller"}]


def test_create_requires_name():
    with pytest.raises(ValidationError):
        OrganizationService.create(name="  ")
