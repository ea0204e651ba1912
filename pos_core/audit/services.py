# pos_core/audit/services.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction

from pos_core.audit.models import AuditEvent


@dataclass(frozen=True)
class AuditRecord:
    event_code: str
    entity_type: str
    entity_id: str
    workspace_id: Optional[UUID]
    actor_user_id: int | None
    metadata: Dict[str, Any]


class AuditService:
    """
    Central audit writer.
    Persists into AuditEvent (immutable).
    """

    @staticmethod
    @transaction.atomic
    def log(
        *,
        event_code: str,
        entity_type: str,
        entity_id,
        workspace_id: Optional[UUID],
        actor_user_id: int | None,
        snapshot: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditRecord:
        metadata = metadata or {}

        AuditEvent.objects.create(
            workspace_id=workspace_id,
            event_code=event_code,
            entity_type=entity_type,
            entity_id=str(entity_id),
            actor_user_id=actor_user_id,
            snapshot=snapshot or {},
            metadata=metadata,
        )

        return AuditRecord(
            event_code=event_code,
            entity_type=entity_type,
            entity_id=str(entity_id),
            workspace_id=workspace_id,
            actor_user_id=actor_user_id,
            metadata=metadata,
        )

    @staticmethod
    def log_entity_created(
        ctx,
        entity_type: str,
        entity_id,
        snapshot: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditRecord:
        """
        Actor and workspace come from the provisioning context (elevated scope wins).
        `metadata` may pin the workspace explicitly via "workspace_id".
        """
        metadata = dict(metadata or {})
        workspace_id = metadata.get("workspace_id") or ctx.effective_workspace_id

        return AuditService.log(
            event_code=f"{entity_type.lower()}.created",
            entity_type=entity_type,
            entity_id=entity_id,
            workspace_id=workspace_id,
            actor_user_id=ctx.effective_actor_user_id,
            snapshot=snapshot,
            metadata=metadata,
        )
