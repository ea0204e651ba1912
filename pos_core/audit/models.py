# pos_core/audit/models.py
import uuid

from django.conf import settings
from django.db import models


class AuditEvent(models.Model):
    """
    Immutable audit record.
    workspace_id is nullable: Organization rows are written before any workspace exists.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    workspace_id = models.UUIDField(null=True, blank=True, db_index=True)

    event_code = models.CharField(max_length=128, db_index=True)  # e.g. "location.assigned"
    entity_type = models.CharField(max_length=128, db_index=True)  # e.g. "Location"
    entity_id = models.CharField(max_length=64, db_index=True)

    actor_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="audit_events",
        null=True,
        blank=True,
    )

    occurred_at = models.DateTimeField(auto_now_add=True, db_index=True)
    snapshot = models.JSONField(default=dict, blank=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "audit_audit_event"
        indexes = [
            models.Index(fields=["workspace_id", "occurred_at"]),
            models.Index(fields=["entity_type", "entity_id"]),
            models.Index(fields=["workspace_id", "event_code"]),
        ]
