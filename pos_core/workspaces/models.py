# pos_core/workspaces/models.py
import secrets

from django.db import models

from pos_core.common.models import UUIDModel
from pos_core.organizations.models import Organization


def generate_workspace_token() -> str:
    return secrets.token_hex(10)


class Zone(UUIDModel):
    """
    Reference geography used as default tax + shipping zone.
    Seeded by ops; never written by provisioning.
    """
    name = models.CharField(max_length=128, unique=True)

    class Meta:
        db_table = "workspaces_zone"

    def __str__(self) -> str:
        return self.name


class WorkspaceStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"
    SUSPENDED = "SUSPENDED", "Suspended"


class Workspace(UUIDModel):
    """
    Tenant's isolated operating context (sales channel).
    Root of all workspace scoping; `code` is immutable once issued.
    """
    name = models.CharField(max_length=255)
    code = models.SlugField(max_length=64, unique=True)  # stable identifier
    token = models.CharField(max_length=64, unique=True, default=generate_workspace_token)

    organization = models.ForeignKey(Organization, on_delete=models.PROTECT, related_name="workspaces")

    currency_code = models.CharField(max_length=3)
    default_tax_zone = models.ForeignKey(Zone, on_delete=models.PROTECT, related_name="+")
    default_shipping_zone = models.ForeignKey(Zone, on_delete=models.PROTECT, related_name="+")
    prices_include_tax = models.BooleanField(default=True)

    contact_phone = models.CharField(max_length=20, blank=True)

    status = models.CharField(
        max_length=16,
        choices=WorkspaceStatus.choices,
        default=WorkspaceStatus.ACTIVE,
        db_index=True,
    )

    locations = models.ManyToManyField("locations.Location", related_name="workspaces", blank=True)
    payment_channels = models.ManyToManyField("payments.PaymentChannel", related_name="workspaces", blank=True)

    class Meta:
        db_table = "workspaces_workspace"
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
