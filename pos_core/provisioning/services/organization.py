# pos_core/provisioning/services/organization.py
from __future__ import annotations

import logging

from pos_core.audit.services import AuditService
from pos_core.common.errors import ErrorCode, log_error, wrap_error
from pos_core.organizations.models import Organization
from pos_core.organizations.services import OrganizationService, organization_display_name
from pos_core.provisioning.types import RegistrationInput

logger = logging.getLogger(__name__)


class OrganizationProvisioner:
    COMPONENT = "OrganizationProvisioner"

    def create_organization(self, ctx, input: RegistrationInput) -> Organization:
        try:
            org = OrganizationService.create(
                name=organization_display_name(input.company_name),
                metadata={"company_name": input.company_name.strip()},
            )
            AuditService.log_entity_created(
                ctx,
                "Organization",
                org.id,
                snapshot={"name": org.name},
                metadata={"company_name": input.company_name.strip()},
            )
            logger.info("Organization %s created for %s", org.id, input.company_name)
            return org
        except Exception as exc:
            log_error(self.COMPONENT, exc, "Organization creation")
            raise wrap_error(exc, ErrorCode.ORGANIZATION_CREATE_FAILED)
