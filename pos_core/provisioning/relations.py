# pos_core/provisioning/relations.py
"""
Privileged relate port.

Standard assignment paths (LocationService.assign_to_workspace, ...) run the
workspace capability check, which cannot pass for a workspace created earlier
in the same transaction. Provisioning writes the through-table row directly
instead and must always read the relation back before trusting it.

    privileged_relate  -> write, no capability check
    verify_relation    -> independent read of the same row
    relate_and_verify  -> both; raises the caller's *_ASSIGN_FAILED code
"""
from __future__ import annotations

import logging
from typing import Dict, Tuple
from uuid import UUID

from django.apps import apps

from pos_core.common.errors import ProvisioningError, wrap_error

logger = logging.getLogger(__name__)

# relation name -> (model owning the M2M field, field name, field points at workspace)
WORKSPACE_RELATIONS: Dict[str, Tuple[str, str, bool]] = {
    "locations": ("workspaces.Workspace", "locations", False),
    "payment_channels": ("workspaces.Workspace", "payment_channels", False),
    "roles": ("iam.Role", "workspaces", True),
}


def _relation_table(relation: str):
    """
    Returns (through_model, workspace_column, entity_column).
    """
    try:
        model_label, field_name, points_at_workspace = WORKSPACE_RELATIONS[relation]
    except KeyError:
        raise ValueError(f"Unknown workspace relation: {relation}") from None

    m2m = apps.get_model(model_label)._meta.get_field(field_name)
    through = m2m.remote_field.through
    owner_col, target_col = m2m.m2m_field_name(), m2m.m2m_reverse_field_name()
    if points_at_workspace:
        return through, target_col, owner_col
    return through, owner_col, target_col


def privileged_relate(ctx, *, workspace_id: UUID, relation: str, entity_id: UUID) -> None:
    through, ws_col, entity_col = _relation_table(relation)
    through.objects.get_or_create(**{f"{ws_col}_id": workspace_id, f"{entity_col}_id": entity_id})
    logger.debug(
        "privileged relate %s: workspace=%s entity=%s actor=%s",
        relation,
        workspace_id,
        entity_id,
        getattr(ctx, "effective_actor_user_id", None),
    )


def verify_relation(*, workspace_id: UUID, relation: str, entity_id: UUID) -> bool:
    through, ws_col, entity_col = _relation_table(relation)
    return through.objects.filter(**{f"{ws_col}_id": workspace_id, f"{entity_col}_id": entity_id}).exists()


def relate_and_verify(
    ctx,
    *,
    workspace_id: UUID,
    relation: str,
    entity_id: UUID,
    error_code: str,
) -> None:
    try:
        privileged_relate(ctx, workspace_id=workspace_id, relation=relation, entity_id=entity_id)
    except ProvisioningError:
        raise
    except Exception as exc:
        raise wrap_error(exc, error_code)

    if not verify_relation(workspace_id=workspace_id, relation=relation, entity_id=entity_id):
        raise ProvisioningError(
            error_code,
            f"Failed to verify {relation} assignment of {entity_id} to workspace {workspace_id}.",
        )
