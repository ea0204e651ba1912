# pos_core/workspaces/selectors.py
from __future__ import annotations

from typing import Optional

from django.conf import settings

from pos_core.common.errors import ErrorCode, ProvisioningError
from pos_core.workspaces.models import Workspace, Zone


def get_workspace_by_code_or_none(*, code: str) -> Optional[Workspace]:
    return Workspace.objects.filter(code__iexact=code).first()


class ZoneResolver:
    """
    Resolves the reference tax/shipping zone by name.
    Missing zone is fatal: nothing can be provisioned without it.
    """

    def __init__(self, zone_name: Optional[str] = None):
        self.zone_name = zone_name or getattr(settings, "POS_DEFAULT_ZONE_NAME", "Kenya")

    def resolve(self) -> Zone:
        zone = Zone.objects.filter(name=self.zone_name).first()
        if zone is None:
            raise ProvisioningError(
                ErrorCode.REFERENCE_ZONE_NOT_FOUND,
                f"{self.zone_name} zone not found. Please ensure the zone exists.",
            )
        return zone
