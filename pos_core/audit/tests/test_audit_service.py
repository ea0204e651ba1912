# pos_core/audit/tests/test_audit_service.py
import uuid

import pytest

from pos_core.audit.models import AuditEvent
from pos_core.audit.services import AuditService
from pos_core.provisioning.context import elevated_scope

pytestmark = pytest.mark.django_db


def test_log_persists_immutable_event(superuser):
    entity_id = uuid.uuid4()
    record = AuditService.log(
        event_code="location.assigned",
        entity_type="Location",
        entity_id=entity_id,
        workspace_id=None,
        actor_user_id=superuser.id,
        metadata={"store_name": "Main Store"},
    )

    ev = AuditEvent.objects.get()
    assert ev.entity_id == str(entity_id)
    assert ev.actor_user_id == superuser.id
    assert ev.metadata == {"store_name": "Main Store"}
    assert record.entity_id == str(entity_id)


def test_log_entity_created_uses_elevated_scope(ctx, workspace, superuser):
    with elevated_scope(ctx, workspace.id):
        AuditService.log_entity_created(ctx, "Role", "r-1", snapshot={"code": "acme-corp-admin"})

    ev = AuditEvent.objects.get()
    assert ev.event_code == "role.created"
    assert ev.workspace_id == workspace.id
    assert ev.actor_user_id == superuser.id
    assert ev.snapshot == {"code": "acme-corp-admin"}


def test_log_entity_created_prefers_explicit_workspace(ctx, workspace):
    AuditService.log_entity_created(
        ctx,
        "Location",
        "loc-1",
        metadata={"workspace_id": str(workspace.id)},
    )

    assert AuditEvent.objects.get().workspace_id == workspace.id
