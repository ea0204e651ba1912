# pos_core/provisioning/services/role.py
from __future__ import annotations

import logging
from uuid import UUID

from pos_core.audit.services import AuditService
from pos_core.common.errors import ErrorCode, ProvisioningError, log_error, wrap_error
from pos_core.iam.events import publish_role_event
from pos_core.iam.models import Role
from pos_core.iam.permissions import ADMIN_PERMISSIONS_VERSION, get_admin_permissions
from pos_core.iam.selectors import get_role_or_none, role_workspace_ids
from pos_core.provisioning.relations import privileged_relate
from pos_core.provisioning.types import RegistrationInput
from pos_core.workspaces.codes import role_code_for
from pos_core.workspaces.models import Workspace

logger = logging.getLogger(__name__)


class RoleProvisioner:
    """
    Admin role for a brand-new workspace.

    RoleService.create checks CreateAdministrator on the target workspace,
    which nobody holds yet. So the role row and its workspace link are written
    directly, the same role.created event is published by hand, and the link is
    read back before anything else may rely on it.
    """
    COMPONENT = "RoleProvisioner"

    def create_admin_role(self, ctx, input: RegistrationInput, workspace_id: UUID, workspace_code: str) -> Role:
        try:
            if not Workspace.objects.filter(id=workspace_id).exists():
                raise ProvisioningError(ErrorCode.ROLE_CREATE_FAILED, f"Workspace {workspace_id} not found.")

            company_name = input.company_name.strip()
            role = Role.objects.create(
                code=role_code_for(workspace_code),
                description=f"Full admin access for {company_name}",
                permissions=get_admin_permissions(),
                permissions_version=ADMIN_PERMISSIONS_VERSION,
            )
            privileged_relate(ctx, workspace_id=workspace_id, relation="roles", entity_id=role.id)

            publish_role_event(role=role, action="created", workspace_ids=[workspace_id])

            self.verify_role_workspace_link(role_id=role.id, workspace_id=workspace_id)

            AuditService.log_entity_created(
                ctx,
                "Role",
                role.id,
                snapshot={
                    "code": role.code,
                    "description": role.description,
                    "permissions": role.permissions,
                    "permissions_version": role.permissions_version,
                },
                metadata={
                    "workspace_id": str(workspace_id),
                    "workspace_code": workspace_code,
                    "company_name": company_name,
                },
            )
            logger.info("Admin role %s created for workspace %s", role.code, workspace_id)
            return role
        except Exception as exc:
            log_error(self.COMPONENT, exc, "Role creation")
            raise wrap_error(exc, ErrorCode.ROLE_CREATE_FAILED)

    @staticmethod
    def verify_role_workspace_link(*, role_id: UUID, workspace_id: UUID) -> None:
        """
        The role must exist and be linked to exactly this workspace.
        """
        if get_role_or_none(role_id=role_id) is None:
            raise ProvisioningError(ErrorCode.ROLE_ASSIGN_FAILED, f"Role {role_id} not found after creation.")

        linked = role_workspace_ids(role_id=role_id)
        if not linked:
            raise ProvisioningError(
                ErrorCode.ROLE_ASSIGN_FAILED,
                f"Role {role_id} has no workspaces assigned. Expected workspace {workspace_id}.",
            )
        if [str(w) for w in linked] != [str(workspace_id)]:
            raise ProvisioningError(
                ErrorCode.ROLE_ASSIGN_FAILED,
                f"Role {role_id} is linked to {[str(w) for w in linked]}, expected only {workspace_id}.",
            )
