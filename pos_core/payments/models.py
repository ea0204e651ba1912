# pos_core/payments/models.py
from django.db import models

from pos_core.common.models import UUIDModel


class PaymentHandler(models.TextChoices):
    CASH = "cash", "Cash"
    MPESA = "mpesa", "M-Pesa"


class PaymentChannel(UUIDModel):
    """
    Tender type accepted by a workspace (payment method).
    ledger_account_code names the clearing account used for reconciliation.
    """
    code = models.SlugField(max_length=80, unique=True)  # {workspace_code}-cash
    name = models.CharField(max_length=128)
    handler = models.CharField(max_length=32, choices=PaymentHandler.choices)
    ledger_account_code = models.CharField(max_length=64)
    is_enabled = models.BooleanField(default=True)

    class Meta:
        db_table = "payments_payment_channel"
        indexes = [models.Index(fields=["handler"])]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
