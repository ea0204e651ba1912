# pos_core/workspaces/services.py
from __future__ import annotations

from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from pos_core.common.events import publish
from pos_core.workspaces.events import WORKSPACE_CREATED
from pos_core.workspaces.models import Workspace, Zone


class WorkspaceService:
    """
    All Workspace mutations live here (write-model boundary).
    Relation writes (locations, payment channels) belong to the owning app's service.
    """

    @staticmethod
    @transaction.atomic
    def create(
        *,
        name: str,
        code: str,
        organization_id: UUID,
        currency_code: str,
        zone: Zone,
        contact_phone: str = "",
        prices_include_tax: bool = True,
    ) -> Workspace:
        name = (name or "").strip()
        code = (code or "").strip().lower()
        currency_code = (currency_code or "").strip().upper()

        if not name:
            raise ValidationError({"name": "This field is required."})
        if not code:
            raise ValidationError({"code": "This field is required."})
        if len(currency_code) != 3:
            raise ValidationError({"currency_code": "Must be a 3-letter ISO code."})

        ws = Workspace.objects.create(
            name=name,
            code=code,
            organization_id=organization_id,
            currency_code=currency_code,
            default_tax_zone=zone,
            default_shipping_zone=zone,
            prices_include_tax=prices_include_tax,
            contact_phone=contact_phone or "",
        )

        publish(
            WORKSPACE_CREATED,
            {
                "workspace_id": str(ws.id),
                "code": ws.code,
                "organization_id": str(ws.organization_id),
            },
        )
        return ws
