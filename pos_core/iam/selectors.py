# pos_core/iam/selectors.py
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from django.contrib.auth import get_user_model

from pos_core.iam.models import AdministratorProfile, Role, UserRole


def get_role_or_none(*, role_id: UUID) -> Optional[Role]:
    return Role.objects.filter(id=role_id).first()


def role_workspace_ids(*, role_id: UUID) -> List[UUID]:
    return list(Role.workspaces.through.objects.filter(role_id=role_id).values_list("workspace_id", flat=True))


def user_role_ids(*, user_id: int) -> List[UUID]:
    return list(UserRole.objects.filter(user_id=user_id).values_list("role_id", flat=True))


def get_identity_by_identifier(identifier: str):
    """
    Identity lookup by external identifier (normalized phone or email).
    """
    User = get_user_model()
    return User.objects.filter(username=identifier).first()


def get_administrator_for_user(*, user_id: int) -> Optional[AdministratorProfile]:
    return AdministratorProfile.objects.filter(user_id=user_id).first()


def email_in_use(email: str, *, exclude_user_id: int | None = None) -> bool:
    qs = AdministratorProfile.objects.filter(email_address__iexact=email)
    if exclude_user_id is not None:
        qs = qs.exclude(user_id=exclude_user_id)
    return qs.exists()
