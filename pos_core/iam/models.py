# pos_core/iam/models.py
from django.conf import settings
from django.db import models

from pos_core.common.models import UUIDModel
from pos_core.iam.permissions import ADMIN_PERMISSIONS_VERSION


class Role(UUIDModel):
    """
    Named, workspace-scoped permission bundle.
    A provisioned admin role is linked to exactly one workspace.
    """
    code = models.SlugField(max_length=80, unique=True)  # {workspace_code}-admin
    description = models.CharField(max_length=255, blank=True)

    permissions = models.JSONField(default=list, blank=True)
    permissions_version = models.PositiveIntegerField(default=ADMIN_PERMISSIONS_VERSION)

    workspaces = models.ManyToManyField("workspaces.Workspace", related_name="roles", blank=True)
    users = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="UserRole",
        related_name="pos_roles",
        blank=True,
    )

    class Meta:
        db_table = "iam_role"

    def __str__(self) -> str:
        return self.code


class UserRole(models.Model):
    """
    Identity <-> Role assignment.
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="user_roles")
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="user_roles")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "iam_user_role"
        constraints = [
            models.UniqueConstraint(fields=["user", "role"], name="uq_user_role"),
        ]


class AuthorizationStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    APPROVED = "APPROVED", "Approved"
    REJECTED = "REJECTED", "Rejected"


class AdministratorProfile(UUIDModel):
    """
    Display identity of an administrator, one-to-one with the auth user.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="administrator")

    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150, blank=True)
    email_address = models.EmailField(max_length=254)

    # platform approval gate for self-registered admins
    authorization_status = models.CharField(
        max_length=16,
        choices=AuthorizationStatus.choices,
        default=AuthorizationStatus.APPROVED,
        db_index=True,
    )

    class Meta:
        db_table = "iam_administrator_profile"
        indexes = [
            models.Index(fields=["email_address"]),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
