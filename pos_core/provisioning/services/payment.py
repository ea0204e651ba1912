# pos_core/provisioning/services/payment.py
from __future__ import annotations

import logging
from typing import List, Tuple
from uuid import UUID

from pos_core.audit.services import AuditService
from pos_core.common.errors import ErrorCode, log_error, wrap_error
from pos_core.payments.models import PaymentChannel, PaymentHandler
from pos_core.payments.services import PaymentChannelService
from pos_core.provisioning.relations import relate_and_verify
from pos_core.workspaces.events import publish_assignment_event

logger = logging.getLogger(__name__)

# (handler, display name); one channel each
DEFAULT_PAYMENT_CHANNELS: Tuple[Tuple[str, str], ...] = (
    (PaymentHandler.CASH.value, "Cash"),
    (PaymentHandler.MPESA.value, "M-Pesa"),
)


class PaymentChannelProvisioner:
    """
    Default tenders for a new workspace. Runs after the ledger bootstrap:
    each channel's reconciliation account must already exist.
    """
    COMPONENT = "PaymentChannelProvisioner"

    def create_and_assign_payment_channels(self, ctx, workspace_id: UUID, workspace_code: str) -> List[PaymentChannel]:
        channels: List[PaymentChannel] = []
        try:
            for handler, name in DEFAULT_PAYMENT_CHANNELS:
                channel = PaymentChannelService.create(
                    code=f"{workspace_code}-{handler}",
                    name=name,
                    handler=handler,
                    workspace_id=workspace_id,
                )

                relate_and_verify(
                    ctx,
                    workspace_id=workspace_id,
                    relation="payment_channels",
                    entity_id=channel.id,
                    error_code=ErrorCode.PAYMENT_CHANNEL_ASSIGN_FAILED,
                )

                publish_assignment_event(
                    workspace_id=workspace_id,
                    entity_type="payment_channel",
                    entity_id=channel.id,
                )
                AuditService.log_entity_created(
                    ctx,
                    "PaymentChannel",
                    channel.id,
                    snapshot={
                        "code": channel.code,
                        "handler": channel.handler,
                        "ledger_account_code": channel.ledger_account_code,
                    },
                    metadata={"workspace_id": str(workspace_id)},
                )
                channels.append(channel)

            logger.info("%d payment channel(s) assigned to workspace %s", len(channels), workspace_id)
            return channels
        except Exception as exc:
            log_error(self.COMPONENT, exc, "Payment channel provisioning")
            raise wrap_error(exc, ErrorCode.PAYMENT_CHANNEL_CREATE_FAILED)
