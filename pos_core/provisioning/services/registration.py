# pos_core/provisioning/services/registration.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from django.db import transaction

from pos_core.common.phone import format_phone_number
from pos_core.iam.models import AdministratorProfile, AuthorizationStatus
from pos_core.iam.selectors import get_identity_by_identifier
from pos_core.provisioning.context import ProvisioningContext, resolve_superuser, with_elevated_scope
from pos_core.provisioning.services.orchestrator import TenantProvisioner
from pos_core.provisioning.types import ProvisionResult, RegistrationInput

logger = logging.getLogger(__name__)

PENDING_APPROVAL_MESSAGE = (
    "Registration successful. Your account is pending admin approval. Please login to continue."
)


@dataclass(frozen=True)
class RegistrationOutcome:
    success: bool
    user_id: str
    message: str
    result: ProvisionResult


class RegistrationService:
    """
    Caller of TenantProvisioner: owns the transaction and the elevated scope.

    The existing-identity lookup happens before the transaction; the unique
    username constraint catches a concurrent registration of the same phone.
    """

    def __init__(self, provisioner: Optional[TenantProvisioner] = None):
        self.provisioner = provisioner or TenantProvisioner()

    def register(self, input: RegistrationInput, *, request_id: Optional[str] = None) -> RegistrationOutcome:
        phone = format_phone_number(input.admin_phone_number)
        existing_identity = get_identity_by_identifier(phone)

        superuser = resolve_superuser()
        ctx = ProvisioningContext(actor_user_id=superuser.id)
        if request_id:
            ctx.request_id = request_id

        with transaction.atomic():
            result = with_elevated_scope(
                ctx,
                None,
                lambda scoped: self.provisioner.provision_tenant(scoped, input, existing_identity),
                actor_user_id=superuser.id,
            )

            # self-registered admins wait for platform approval
            if existing_identity is None:
                AdministratorProfile.objects.filter(id=result.administrator_id).update(
                    authorization_status=AuthorizationStatus.PENDING,
                )

        logger.info(
            "Registration completed for %s (identity %s, %s)",
            input.company_name,
            result.identity_id,
            "new" if existing_identity is None else "reused",
        )
        return RegistrationOutcome(
            success=True,
            user_id=result.identity_id,
            message=PENDING_APPROVAL_MESSAGE,
            result=result,
        )
