# pos_core/locations/services.py
from __future__ import annotations

from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import PermissionDenied, ValidationError

from pos_core.common.events import publish
from pos_core.iam.access import has_workspace_permission
from pos_core.iam.permissions import Perm
from pos_core.locations.models import Location
from pos_core.workspaces.events import publish_assignment_event
from pos_core.workspaces.models import Workspace


class LocationService:
    """
    Standard (validated, permission-checked) Location writes.
    """

    @staticmethod
    @transaction.atomic
    def create(*, name: str, description: str = "") -> Location:
        name = (name or "").strip()
        if not name:
            raise ValidationError({"name": "This field is required."})

        loc = Location.objects.create(name=name, description=(description or "").strip())
        publish("location.created", {"location_id": str(loc.id), "name": loc.name})
        return loc

    @staticmethod
    @transaction.atomic
    def assign_to_workspace(*, location_id: UUID, workspace_id: UUID, actor_user_id: int | None) -> None:
        if not has_workspace_permission(
            user_id=actor_user_id,
            workspace_id=workspace_id,
            permission=Perm.CREATE_STOCK_LOCATION,
        ):
            raise PermissionDenied(f"Not allowed to assign locations to workspace {workspace_id}.")

        ws = Workspace.objects.get(id=workspace_id)
        loc = Location.objects.get(id=location_id)
        ws.locations.add(loc)

        publish_assignment_event(workspace_id=workspace_id, entity_type="location", entity_id=location_id)
