# pos_core/ledger/models.py
from django.db import models

from pos_core.common.models import UUIDModel
from pos_core.ledger.constants import AccountType


class LedgerAccount(UUIDModel):
    """
    Chart-of-accounts entry, one set per workspace.
    """
    workspace = models.ForeignKey("workspaces.Workspace", on_delete=models.CASCADE, related_name="ledger_accounts")

    code = models.CharField(max_length=64)
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=16, choices=AccountType.choices)

    is_active = models.BooleanField(default=True)
    is_parent = models.BooleanField(default=False)
    parent_account = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        related_name="sub_accounts",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "ledger_account"
        constraints = [
            models.UniqueConstraint(fields=["workspace", "code"], name="uq_ledger_account_workspace_code"),
        ]
        indexes = [
            models.Index(fields=["workspace", "type"]),
        ]

    def __str__(self) -> str:
        return f"{self.code} ({self.type})"
