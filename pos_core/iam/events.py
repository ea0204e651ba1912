# pos_core/iam/events.py
"""
Event builders for roles and administrators.

RoleService (standard path) and the provisioning bootstrap (privileged path)
both publish through these, so subscribers see one payload shape.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable

from pos_core.common.events import publish

ROLE_EVENT = "role.{action}"
ADMINISTRATOR_EVENT = "administrator.{action}"
ADMIN_ACTION_EVENT = "admin_action"


def role_event_payload(*, role, action: str, workspace_ids: Iterable) -> Dict[str, Any]:
    return {
        "action": action,
        "role_id": str(role.id),
        "code": role.code,
        "description": role.description,
        "permissions": list(role.permissions),
        "permissions_version": role.permissions_version,
        "workspace_ids": [str(w) for w in workspace_ids],
    }


def publish_role_event(*, role, action: str, workspace_ids: Iterable) -> Dict[str, Any]:
    payload = role_event_payload(role=role, action=action, workspace_ids=workspace_ids)
    publish(ROLE_EVENT.format(action=action), payload)
    return payload


def publish_administrator_event(*, profile, action: str) -> Dict[str, Any]:
    payload = {
        "action": action,
        "administrator_id": str(profile.id),
        "user_id": str(profile.user_id),
        "first_name": profile.first_name,
        "last_name": profile.last_name,
        "email_address": profile.email_address,
    }
    publish(ADMINISTRATOR_EVENT.format(action=action), payload)
    return payload


def publish_admin_action(*, workspace_id, entity: str, action: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Consolidated notification consumed by workspace notification handlers.
    entity: "admin" | "user"
    """
    payload = {
        "workspace_id": str(workspace_id),
        "entity": entity,
        "action": action,
        "data": data,
    }
    publish(ADMIN_ACTION_EVENT, payload)
    return payload
