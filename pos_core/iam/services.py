# pos_core/iam/services.py
from __future__ import annotations

from typing import Iterable
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import PermissionDenied, ValidationError

from pos_core.iam.access import has_workspace_permission
from pos_core.iam.events import publish_role_event
from pos_core.iam.models import Role, UserRole
from pos_core.iam.permissions import ADMIN_PERMISSIONS_VERSION, KNOWN_PERMISSIONS, Perm


class RoleService:
    """
    Standard (permission-checked) role writes.

    The actor must hold CreateAdministrator on every workspace the role is
    scoped to. Tenant bootstrap cannot satisfy this for a workspace created in
    the same transaction and goes through the provisioning bootstrap instead.
    """

    @staticmethod
    @transaction.atomic
    def create(
        *,
        code: str,
        description: str,
        permissions: Iterable[str],
        workspace_ids: Iterable[UUID],
        actor_user_id: int | None,
        permissions_version: int = ADMIN_PERMISSIONS_VERSION,
    ) -> Role:
        code = (code or "").strip()
        permissions = list(permissions or [])
        workspace_ids = list(workspace_ids or [])

        if not code:
            raise ValidationError({"code": "This field is required."})
        if not workspace_ids:
            raise ValidationError({"workspace_ids": "A role must be scoped to at least one workspace."})

        unknown = sorted(set(permissions) - KNOWN_PERMISSIONS)
        if unknown:
            raise ValidationError({"permissions": f"Unknown permissions: {unknown}"})

        for workspace_id in workspace_ids:
            if not has_workspace_permission(
                user_id=actor_user_id,
                workspace_id=workspace_id,
                permission=Perm.CREATE_ADMINISTRATOR,
            ):
                raise PermissionDenied(f"Not allowed to create roles for workspace {workspace_id}.")

        role = Role.objects.create(
            code=code,
            description=description or "",
            permissions=permissions,
            permissions_version=permissions_version,
        )
        role.workspaces.set(workspace_ids)

        publish_role_event(role=role, action="created", workspace_ids=workspace_ids)
        return role

    @staticmethod
    @transaction.atomic
    def assign_to_user(*, role_id: UUID, user_id: int) -> bool:
        """
        Idempotent. Returns True when a new assignment was written.
        """
        _, created = UserRole.objects.get_or_create(user_id=user_id, role_id=role_id)
        return created
