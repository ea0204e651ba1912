# pos_core/provisioning/validator.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email

from pos_core.common.errors import ErrorCode, ProvisioningError
from pos_core.common.phone import format_phone_number
from pos_core.iam.selectors import email_in_use
from pos_core.provisioning.types import RegistrationInput
from pos_core.workspaces.codes import base_code, first_available_code, is_code_taken, reserved_codes
from pos_core.workspaces.models import Zone
from pos_core.workspaces.selectors import ZoneResolver

logger = logging.getLogger(__name__)

MAX_COMPANY_NAME_LENGTH = 255


@dataclass(frozen=True)
class ValidatedRegistration:
    phone: str
    email: Optional[str]
    currency: str
    zone: Zone
    workspace_code: str


class RegistrationValidator:
    """
    Read-only pre-flight checks, cheapest first:

      1. syntax (company name, phone, email, store name)
      2. currency is supported
      3. reference zone resolves        (fatal; before any tenant table is read)
      4. a workspace code is available
      5. admin email not used by another administrator

    Nothing is written here.
    """

    def __init__(self, zone_resolver: Optional[ZoneResolver] = None):
        self.zone_resolver = zone_resolver or ZoneResolver()

    def validate_input(self, input: RegistrationInput, *, existing_identity=None) -> ValidatedRegistration:
        phone, email = self._validate_syntax(input)
        currency = self._validate_currency(input.currency)
        zone = self.zone_resolver.resolve()
        workspace_code = self._validate_workspace_code(input.company_name)
        if email:
            self.validate_admin_email_uniqueness(
                email,
                exclude_user_id=getattr(existing_identity, "id", None),
            )

        logger.debug("registration input valid: code=%s zone=%s", workspace_code, zone.name)
        return ValidatedRegistration(
            phone=phone,
            email=email,
            currency=currency,
            zone=zone,
            workspace_code=workspace_code,
        )

    # ---------------------------------------------------------------------
    # Individual checks
    # ---------------------------------------------------------------------
    def _validate_syntax(self, input: RegistrationInput):
        company_name = (input.company_name or "").strip()
        if not company_name:
            raise ProvisioningError(ErrorCode.VALIDATION_FAILED, "Company name is required.")
        if len(company_name) > MAX_COMPANY_NAME_LENGTH:
            raise ProvisioningError(
                ErrorCode.VALIDATION_FAILED,
                f"Company name must be at most {MAX_COMPANY_NAME_LENGTH} characters.",
            )
        if not (input.store_name or "").strip():
            raise ProvisioningError(
                ErrorCode.STORE_NAME_REQUIRED,
                "Store name is required to complete registration.",
            )

        phone = format_phone_number(input.admin_phone_number)

        email = (input.admin_email or "").strip() or None
        if email:
            try:
                validate_email(email)
            except DjangoValidationError:
                raise ProvisioningError(ErrorCode.INVALID_EMAIL, f"Invalid email address: {email}") from None

        return phone, email

    def _validate_currency(self, currency: str) -> str:
        code = (currency or "").strip().upper()
        supported = getattr(settings, "POS_SUPPORTED_CURRENCIES", [])
        if code not in supported:
            raise ProvisioningError(
                ErrorCode.UNSUPPORTED_CURRENCY,
                f"Unsupported currency {currency!r}. Supported: {', '.join(supported)}",
            )
        return code

    def _validate_workspace_code(self, company_name: str) -> str:
        base = base_code(company_name)
        if not base:
            raise ProvisioningError(
                ErrorCode.WORKSPACE_CODE_UNAVAILABLE,
                f"Company name {company_name!r} does not produce a usable workspace code.",
            )
        if base in reserved_codes():
            raise ProvisioningError(
                ErrorCode.WORKSPACE_CODE_UNAVAILABLE,
                f"Workspace code {base!r} is reserved. Please choose a different company name.",
            )

        code = first_available_code(company_name)
        if code is None:
            raise ProvisioningError(
                ErrorCode.WORKSPACE_CODE_UNAVAILABLE,
                f"No workspace code available for {company_name!r}. Please choose a different company name.",
            )
        return code

    @staticmethod
    def check_workspace_code_availability(code: str) -> bool:
        code = (code or "").strip().lower()
        return bool(code) and not is_code_taken(code)

    @staticmethod
    def validate_admin_email_uniqueness(email: str, *, exclude_user_id: int | None = None) -> None:
        if email_in_use(email, exclude_user_id=exclude_user_id):
            raise ProvisioningError(
                ErrorCode.EMAIL_ALREADY_REGISTERED,
                f"An administrator with email {email} already exists.",
            )
