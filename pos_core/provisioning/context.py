# pos_core/provisioning/context.py
"""
Execution context for provisioning + scoped privilege elevation.

`elevated_scope` attaches a privileged actor (platform superuser) scoped to one
workspace for the duration of a `with` block and always restores the previous
scope on exit, whether the block returns, raises or is abandoned. Scopes nest.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, TypeVar
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model

from pos_core.common.errors import ErrorCode, ProvisioningError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Elevation:
    actor_user_id: int
    workspace_id: Optional[UUID] = None
    organization_id: Optional[UUID] = None


@dataclass
class ProvisioningContext:
    actor_user_id: Optional[int] = None
    workspace_id: Optional[UUID] = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    elevation: Optional[Elevation] = None

    @property
    def is_elevated(self) -> bool:
        return self.elevation is not None

    @property
    def effective_actor_user_id(self) -> Optional[int]:
        if self.elevation is not None:
            return self.elevation.actor_user_id
        return self.actor_user_id

    @property
    def effective_workspace_id(self) -> Optional[UUID]:
        if self.elevation is not None and self.elevation.workspace_id is not None:
            return self.elevation.workspace_id
        return self.workspace_id


def resolve_superuser():
    """
    POS_SUPERADMIN_USERNAME if configured, else the oldest active superuser.
    """
    User = get_user_model()
    username = getattr(settings, "POS_SUPERADMIN_USERNAME", "") or ""

    qs = User.objects.filter(is_superuser=True, is_active=True)
    user = qs.filter(username=username).first() if username else qs.order_by("id").first()
    if user is None:
        raise ProvisioningError(
            ErrorCode.SUPERADMIN_NOT_FOUND,
            "Superadmin user not found. Cannot run provisioning with elevated scope.",
        )
    return user


@contextmanager
def elevated_scope(
    ctx: ProvisioningContext,
    workspace_id: Optional[UUID],
    *,
    actor_user_id: Optional[int] = None,
    organization_id: Optional[UUID] = None,
) -> Iterator[ProvisioningContext]:
    previous = ctx.elevation

    if actor_user_id is None:
        actor_user_id = previous.actor_user_id if previous is not None else resolve_superuser().id
    if organization_id is None and previous is not None:
        organization_id = previous.organization_id

    ctx.elevation = Elevation(
        actor_user_id=actor_user_id,
        workspace_id=workspace_id,
        organization_id=organization_id,
    )
    logger.debug("elevated scope entered: actor=%s workspace=%s", actor_user_id, workspace_id)
    try:
        yield ctx
    finally:
        ctx.elevation = previous
        logger.debug("elevated scope restored: workspace=%s", previous.workspace_id if previous else None)


def with_elevated_scope(
    ctx: ProvisioningContext,
    workspace_id: Optional[UUID],
    fn: Callable[[ProvisioningContext], T],
    **kwargs,
) -> T:
    with elevated_scope(ctx, workspace_id, **kwargs) as scoped:
        return fn(scoped)
