# pos_core/organizations/models.py
from django.db import models

from pos_core.common.models import UUIDModel


class Organization(UUIDModel):
    """
    Vendor/owner record behind a workspace.
    Platform-owned; workspaces reference it, never the other way round.
    """
    name = models.CharField(max_length=255)

    # flexible, avoids schema churn (billing notes, onboarding source, etc.)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "organizations_organization"
        indexes = [
            models.Index(fields=["name"]),
            models.Index(fields=["created_at"]),
        ]

    def __str__(self) -> str:
        return self.name
