# pos_core/iam/access.py
from __future__ import annotations

from uuid import UUID

from django.contrib.auth import get_user_model

from pos_core.iam.models import UserRole


def has_workspace_permission(*, user_id: int | None, workspace_id: UUID, permission: str) -> bool:
    """
    Capability check used by the standard (validated) write paths.

    Superusers pass. Everyone else needs a role linked to the workspace
    whose permission list contains `permission`.
    """
    if user_id is None:
        return False

    User = get_user_model()
    if User.objects.filter(id=user_id, is_superuser=True, is_active=True).exists():
        return True

    permission_lists = UserRole.objects.filter(
        user_id=user_id,
        role__workspaces__id=workspace_id,
    ).values_list("role__permissions", flat=True)

    return any(permission in (perms or []) for perms in permission_lists)
