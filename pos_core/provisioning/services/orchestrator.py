# pos_core/provisioning/services/orchestrator.py
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from pos_core.common.errors import ErrorCode, ProvisioningError, log_error
from pos_core.common.events import publish
from pos_core.common.phone import format_phone_number
from pos_core.common.tracing import get_tracer
from pos_core.ledger.services import LedgerBootstrapService
from pos_core.provisioning.context import ProvisioningContext, elevated_scope
from pos_core.provisioning.services.identity import IdentityProvisioner
from pos_core.provisioning.services.location import LocationProvisioner
from pos_core.provisioning.services.organization import OrganizationProvisioner
from pos_core.provisioning.services.payment import PaymentChannelProvisioner
from pos_core.provisioning.services.role import RoleProvisioner
from pos_core.provisioning.services.workspace import WorkspaceProvisioner
from pos_core.provisioning.types import ProvisionResult, RegistrationInput
from pos_core.provisioning.validator import RegistrationValidator

logger = logging.getLogger(__name__)

COMPANY_REGISTERED = "company.registered"

TOTAL_STEPS = 8


class TenantProvisioner:
    """
    Provisions a complete tenant in one unit of work.

    Sequence (fatal on first error, no retries, no compensation):
        validate (incl. zone) -> organization -> workspace -> ledger
        -> location -> payment channels -> role -> identity

    Must run inside the caller's transaction.atomic(); rollback of partial
    writes is the caller's transaction, not ours.
    """
    COMPONENT = "TenantProvisioner"

    def __init__(
        self,
        *,
        validator: Optional[RegistrationValidator] = None,
        organizations: Optional[OrganizationProvisioner] = None,
        workspaces: Optional[WorkspaceProvisioner] = None,
        ledger=None,
        locations: Optional[LocationProvisioner] = None,
        payments: Optional[PaymentChannelProvisioner] = None,
        roles: Optional[RoleProvisioner] = None,
        identities: Optional[IdentityProvisioner] = None,
        tracer=None,
    ):
        self.validator = validator or RegistrationValidator()
        self.organizations = organizations or OrganizationProvisioner()
        self.workspaces = workspaces or WorkspaceProvisioner()
        self.ledger = ledger or LedgerBootstrapService
        self.locations = locations or LocationProvisioner()
        self.payments = payments or PaymentChannelProvisioner()
        self.roles = roles or RoleProvisioner()
        self.identities = identities or IdentityProvisioner()
        self.tracer = tracer or get_tracer()

    def provision_tenant(
        self,
        ctx: ProvisioningContext,
        input: RegistrationInput,
        existing_identity=None,
    ) -> ProvisionResult:
        span = self.tracer.start_span("tenant.provision", {"company_name": input.company_name})
        try:
            if not transaction.get_connection().in_atomic_block:
                raise ProvisioningError(
                    ErrorCode.TRANSACTION_REQUIRED,
                    "Tenant provisioning must run inside transaction.atomic().",
                )

            phone = format_phone_number(input.admin_phone_number)

            logger.info("Step 1/%d: validating registration for %s", TOTAL_STEPS, input.company_name)
            validated = self.validator.validate_input(input, existing_identity=existing_identity)
            span.add_event("validated", {"workspace_code": validated.workspace_code})

            logger.info("Step 2/%d: creating organization", TOTAL_STEPS)
            organization = self.organizations.create_organization(ctx, input)
            span.add_event("organization.created", {"organization_id": str(organization.id)})

            logger.info("Step 3/%d: creating workspace", TOTAL_STEPS)
            workspace = self.workspaces.create_workspace(ctx, input, validated.zone, phone, organization.id)
            span.add_event("workspace.created", {"workspace_id": str(workspace.id), "code": workspace.code})

            # narrow the elevated actor to the workspace that now exists
            with elevated_scope(ctx, workspace.id, organization_id=organization.id):
                logger.info("Step 4/%d: bootstrapping ledger", TOTAL_STEPS)
                ledger = self.ledger.initialize_for_workspace(workspace_id=workspace.id)
                missing = ledger.missing_codes()
                if missing:
                    raise ProvisioningError(
                        ErrorCode.LEDGER_INCOMPLETE,
                        f"Missing required accounts for workspace {workspace.code}: {', '.join(missing)}",
                    )
                span.add_event("ledger.initialized", {"created": len(ledger.created), "existing": len(ledger.existing)})

                logger.info("Step 5/%d: creating store location", TOTAL_STEPS)
                location = self.locations.create_and_assign_location(ctx, input, workspace.id)

                logger.info("Step 6/%d: creating payment channels", TOTAL_STEPS)
                self.payments.create_and_assign_payment_channels(ctx, workspace.id, workspace.code)

                logger.info("Step 7/%d: creating admin role", TOTAL_STEPS)
                role = self.roles.create_admin_role(ctx, input, workspace.id, workspace.code)

                logger.info("Step 8/%d: provisioning administrator", TOTAL_STEPS)
                administrator = self.identities.create_administrator(ctx, input, role, phone, existing_identity)

            if not administrator.user_id:
                raise ProvisioningError(
                    ErrorCode.PROVISIONING_FAILED,
                    f"Administrator {administrator.id} has no linked identity.",
                )

            result = ProvisionResult(
                organization_id=str(organization.id),
                workspace_id=str(workspace.id),
                location_id=str(location.id),
                role_id=str(role.id),
                administrator_id=str(administrator.id),
                identity_id=str(administrator.user_id),
            )

            span.set_attributes({**result.as_dict(), "workspace_code": workspace.code})
            publish(
                COMPANY_REGISTERED,
                {
                    "company_name": input.company_name,
                    "company_code": workspace.code,
                    "workspace_id": result.workspace_id,
                    "admin_name": f"{input.admin_first_name} {input.admin_last_name}".strip(),
                    "admin_phone": phone,
                    "admin_email": (input.admin_email or "").strip() or None,
                    "store_name": input.store_name.strip(),
                },
            )
            span.end(success=True)

            logger.info("Tenant %s provisioned (workspace %s)", workspace.code, result.workspace_id)
            return result
        except Exception as exc:
            log_error(self.COMPONENT, exc, "Provisioning")
            span.end(success=False, error=exc)
            raise ProvisioningError(
                ErrorCode.PROVISIONING_FAILED,
                f"Tenant provisioning failed: {exc}",
                component=self.COMPONENT,
                stage="Provisioning",
            ) from exc
