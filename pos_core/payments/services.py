# pos_core/payments/services.py
from __future__ import annotations

from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import PermissionDenied, ValidationError

from pos_core.common.events import publish
from pos_core.iam.access import has_workspace_permission
from pos_core.iam.permissions import Perm
from pos_core.ledger.constants import ledger_account_for_handler
from pos_core.ledger.selectors import get_account_or_none
from pos_core.payments.models import PaymentChannel, PaymentHandler
from pos_core.workspaces.events import publish_assignment_event
from pos_core.workspaces.models import Workspace


class PaymentChannelService:
    """
    Standard (validated, permission-checked) PaymentChannel writes.
    """

    @staticmethod
    @transaction.atomic
    def create(*, code: str, name: str, handler: str, workspace_id: UUID) -> PaymentChannel:
        """
        The reconciliation ledger account must already exist for the workspace.
        """
        code = (code or "").strip().lower()
        name = (name or "").strip()

        if not code:
            raise ValidationError({"code": "This field is required."})
        if not name:
            raise ValidationError({"name": "This field is required."})
        if handler not in PaymentHandler.values:
            raise ValidationError({"handler": f"Invalid handler. Allowed: {list(PaymentHandler.values)}"})

        ledger_code = ledger_account_for_handler(handler)
        if get_account_or_none(workspace_id=workspace_id, code=ledger_code) is None:
            raise ValidationError(
                {"ledger_account_code": f"Ledger account {ledger_code} missing for workspace {workspace_id}."}
            )

        channel = PaymentChannel.objects.create(
            code=code,
            name=name,
            handler=handler,
            ledger_account_code=ledger_code,
            is_enabled=True,
        )
        publish(
            "payment_channel.created",
            {"payment_channel_id": str(channel.id), "code": channel.code, "handler": channel.handler},
        )
        return channel

    @staticmethod
    @transaction.atomic
    def assign_to_workspace(*, payment_channel_id: UUID, workspace_id: UUID, actor_user_id: int | None) -> None:
        if not has_workspace_permission(
            user_id=actor_user_id,
            workspace_id=workspace_id,
            permission=Perm.UPDATE_SETTINGS,
        ):
            raise PermissionDenied(f"Not allowed to assign payment channels to workspace {workspace_id}.")

        ws = Workspace.objects.get(id=workspace_id)
        channel = PaymentChannel.objects.get(id=payment_channel_id)
        ws.payment_channels.add(channel)

        publish_assignment_event(
            workspace_id=workspace_id,
            entity_type="payment_channel",
            entity_id=payment_channel_id,
        )
