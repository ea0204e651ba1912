# pos_core/provisioning/services/identity.py
from __future__ import annotations

import logging
import secrets
from typing import Optional, Tuple

from django.conf import settings
from django.contrib.auth import get_user_model

from pos_core.audit.services import AuditService
from pos_core.common.errors import ErrorCode, ProvisioningError, log_error, wrap_error
from pos_core.iam.events import publish_admin_action, publish_administrator_event
from pos_core.iam.models import AdministratorProfile, Role, UserRole
from pos_core.iam.selectors import get_administrator_for_user, role_workspace_ids, user_role_ids
from pos_core.iam.services import RoleService
from pos_core.provisioning.types import RegistrationInput

logger = logging.getLogger(__name__)


def sentinel_email(phone: str) -> str:
    """
    Placeholder for admins who registered without an email.
    """
    domain = getattr(settings, "POS_SENTINEL_EMAIL_DOMAIN", "pos.local")
    return f"admin.{phone}@{domain}"


class IdentityProvisioner:
    """
    Administrator identity (auth user) + AdministratorProfile.

    New phone: create the user with the role attached.
    Returning phone: reuse the user, append the role if missing.
    Either way the user's roles are read back before the profile is touched.

    The password is random and never used; login is OTP-based.
    """
    COMPONENT = "IdentityProvisioner"

    def create_administrator(
        self,
        ctx,
        input: RegistrationInput,
        role: Role,
        phone: str,
        existing_identity=None,
    ) -> AdministratorProfile:
        try:
            if existing_identity is None:
                user = self._create_identity(input=input, role=role, phone=phone)
                user_created = True
            else:
                user = self._attach_role(existing_identity=existing_identity, role=role)
                user_created = False

            self.verify_role_assignment(user_id=user.id, role_id=role.id)

            profile, profile_created = self._ensure_profile(input=input, user=user, phone=phone)
            if not AdministratorProfile.objects.filter(id=profile.id, user_id=user.id).exists():
                raise ProvisioningError(
                    ErrorCode.IDENTITY_ASSIGN_FAILED,
                    f"Administrator {profile.id} does not resolve to user {user.id}.",
                )

            self._record_created(
                ctx,
                role=role,
                user=user,
                profile=profile,
                user_created=user_created,
                profile_created=profile_created,
            )
            return profile
        except Exception as exc:
            log_error(self.COMPONENT, exc, "Administrator provisioning")
            raise wrap_error(exc, ErrorCode.ADMIN_CREATE_FAILED)

    # ---------------------------------------------------------------------
    # Identity
    # ---------------------------------------------------------------------
    @staticmethod
    def _create_identity(*, input: RegistrationInput, role: Role, phone: str):
        User = get_user_model()
        user = User.objects.create_user(
            username=phone,
            password=secrets.token_urlsafe(32),
            first_name=(input.admin_first_name or "").strip(),
            last_name=(input.admin_last_name or "").strip(),
            is_active=True,
        )
        UserRole.objects.create(user=user, role=role)
        logger.info("Identity %s created with role %s", user.id, role.code)
        return user

    @staticmethod
    def _attach_role(*, existing_identity, role: Role):
        User = get_user_model()
        user = User.objects.filter(id=existing_identity.id).first()
        if user is None:
            raise ProvisioningError(
                ErrorCode.IDENTITY_ASSIGN_FAILED,
                f"User {existing_identity.id} not found.",
            )

        if role.id in user_role_ids(user_id=user.id):
            logger.info("Identity %s already has role %s", user.id, role.code)
            return user

        RoleService.assign_to_user(role_id=role.id, user_id=user.id)
        logger.info("Role %s appended to existing identity %s", role.code, user.id)
        return user

    @staticmethod
    def verify_role_assignment(*, user_id: int, role_id) -> None:
        if role_id not in user_role_ids(user_id=user_id):
            raise ProvisioningError(
                ErrorCode.IDENTITY_ASSIGN_FAILED,
                f"Role {role_id} was not assigned to user {user_id}.",
            )

    # ---------------------------------------------------------------------
    # AdministratorProfile
    # ---------------------------------------------------------------------
    @staticmethod
    def _ensure_profile(*, input: RegistrationInput, user, phone: str) -> Tuple[AdministratorProfile, bool]:
        first_name = (input.admin_first_name or "").strip()
        last_name = (input.admin_last_name or "").strip()
        email: Optional[str] = (input.admin_email or "").strip() or None

        profile = get_administrator_for_user(user_id=user.id)
        if profile is None:
            profile = AdministratorProfile.objects.create(
                user=user,
                first_name=first_name,
                last_name=last_name,
                email_address=email or sentinel_email(phone),
            )
            publish_administrator_event(profile=profile, action="created")
            return profile, True

        update_fields = []
        if first_name and profile.first_name != first_name:
            profile.first_name = first_name
            update_fields.append("first_name")
        if profile.last_name != last_name:
            profile.last_name = last_name
            update_fields.append("last_name")
        if email and profile.email_address != email:
            profile.email_address = email
            update_fields.append("email_address")

        if update_fields:
            profile.save(update_fields=update_fields + ["updated_at"])
            publish_administrator_event(profile=profile, action="updated")
        return profile, False

    # ---------------------------------------------------------------------
    # Audit + notifications
    # ---------------------------------------------------------------------
    @staticmethod
    def _record_created(ctx, *, role: Role, user, profile: AdministratorProfile, user_created: bool, profile_created: bool):
        workspace_ids = role_workspace_ids(role_id=role.id)
        workspace_id = workspace_ids[0] if workspace_ids else ctx.effective_workspace_id

        if user_created:
            AuditService.log_entity_created(
                ctx,
                "User",
                user.id,
                snapshot={"username": user.username},
                metadata={"workspace_id": str(workspace_id), "role_id": str(role.id)},
            )
            publish_admin_action(
                workspace_id=workspace_id,
                entity="user",
                action="created",
                data={"user_id": str(user.id), "identifier": user.username},
            )

        if profile_created:
            AuditService.log_entity_created(
                ctx,
                "Administrator",
                profile.id,
                snapshot={
                    "first_name": profile.first_name,
                    "last_name": profile.last_name,
                    "email_address": profile.email_address,
                },
                metadata={"workspace_id": str(workspace_id), "user_id": str(user.id)},
            )
            publish_admin_action(
                workspace_id=workspace_id,
                entity="admin",
                action="created",
                data={
                    "administrator_id": str(profile.id),
                    "user_id": str(user.id),
                    "first_name": profile.first_name,
                    "last_name": profile.last_name,
                },
            )
