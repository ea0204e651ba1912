# pos_core/provisioning/services/workspace.py
from __future__ import annotations

import logging
from typing import Set
from uuid import UUID

from django.conf import settings
from django.db import IntegrityError

from pos_core.audit.services import AuditService
from pos_core.common.errors import ErrorCode, ProvisioningError, log_error, wrap_error
from pos_core.organizations.models import Organization
from pos_core.provisioning.types import RegistrationInput
from pos_core.workspaces.codes import first_available_code
from pos_core.workspaces.models import Workspace, Zone
from pos_core.workspaces.services import WorkspaceService

logger = logging.getLogger(__name__)


class WorkspaceProvisioner:
    """
    Creates the tenant workspace.

    The code is re-derived here rather than trusted from validation: another
    registration may have taken it since. A unique violation (code or token)
    rolls back only WorkspaceService.create's savepoint and the next suffix is tried.
    """
    COMPONENT = "WorkspaceProvisioner"

    def create_workspace(
        self,
        ctx,
        input: RegistrationInput,
        zone: Zone,
        admin_phone: str,
        organization_id: UUID,
    ) -> Workspace:
        try:
            if not Organization.objects.filter(id=organization_id).exists():
                raise ProvisioningError(
                    ErrorCode.WORKSPACE_CREATE_FAILED,
                    f"Organization {organization_id} not found.",
                )

            max_attempts = getattr(settings, "POS_WORKSPACE_CODE_MAX_ATTEMPTS", 20)
            tried: Set[str] = set()

            for _ in range(max_attempts):
                code = first_available_code(input.company_name, skip=tried)
                if code is None:
                    break
                tried.add(code)

                try:
                    ws = WorkspaceService.create(
                        name=input.company_name,
                        code=code,
                        organization_id=organization_id,
                        currency_code=input.currency,
                        zone=zone,
                        contact_phone=admin_phone,
                        prices_include_tax=True,
                    )
                except IntegrityError:
                    logger.warning("Workspace code %s collided on insert, trying next suffix", code)
                    continue

                AuditService.log_entity_created(
                    ctx,
                    "Workspace",
                    ws.id,
                    snapshot={
                        "code": ws.code,
                        "name": ws.name,
                        "currency_code": ws.currency_code,
                        "zone": zone.name,
                    },
                    metadata={"workspace_id": str(ws.id), "organization_id": str(organization_id)},
                )
                logger.info("Workspace %s (%s) created", ws.code, ws.id)
                return ws

            raise ProvisioningError(
                ErrorCode.WORKSPACE_CODE_UNAVAILABLE,
                f"Could not allocate a workspace code for {input.company_name!r} "
                f"after {len(tried)} attempt(s).",
            )
        except Exception as exc:
            log_error(self.COMPONENT, exc, "Workspace creation")
            raise wrap_error(exc, ErrorCode.WORKSPACE_CREATE_FAILED)
