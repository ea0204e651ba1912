# pos_core/organizations/services.py
from __future__ import annotations

from typing import Optional

from django.db import transaction
from rest_framework.exceptions import ValidationError

from pos_core.common.events import publish
from pos_core.organizations.models import Organization


def organization_display_name(company_name: str) -> str:
    return f"{company_name.strip()} Seller"


class OrganizationService:
    """
    All Organization mutations live here (write-model boundary).
    """

    @staticmethod
    @transaction.atomic
    def create(*, name: str, metadata: Optional[dict] = None) -> Organization:
        name = (name or "").strip()
        if not name:
            raise ValidationError({"name": "This field is required."})

        org = Organization.objects.create(name=name, metadata=metadata or {})

        publish("organization.created", {"organization_id": str(org.id), "name": org.name})
        return org
