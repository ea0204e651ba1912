# pos_core/workspaces/events.py
"""
Workspace relation events.

Every path that links a resource to a workspace (validated service or
provisioning bootstrap) publishes through `publish_assignment_event`.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pos_core.common.events import publish

WORKSPACE_CREATED = "workspace.created"


def assignment_event_name(entity_type: str, action: str = "assigned") -> str:
    return f"{entity_type}.{action}"


def assignment_event_payload(
    *,
    workspace_id,
    entity_type: str,
    entity_id,
    action: str = "assigned",
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    payload = {
        "workspace_id": str(workspace_id),
        "entity_type": entity_type,
        "entity_id": str(entity_id),
        "action": action,
    }
    if extra:
        payload.update(extra)
    return payload


def publish_assignment_event(
    *,
    workspace_id,
    entity_type: str,
    entity_id,
    action: str = "assigned",
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    payload = assignment_event_payload(
        workspace_id=workspace_id,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        extra=extra,
    )
    publish(assignment_event_name(entity_type, action), payload)
    return payload
