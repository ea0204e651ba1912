# pos_core/common/errors.py
from __future__ import annotations

import logging
from typing import Optional

from rest_framework import status
from rest_framework.exceptions import APIException

logger = logging.getLogger(__name__)


class ErrorCode:
    # validation (pre-write, fast-fail)
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_PHONE_NUMBER = "INVALID_PHONE_NUMBER"
    INVALID_EMAIL = "INVALID_EMAIL"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    UNSUPPORTED_CURRENCY = "UNSUPPORTED_CURRENCY"
    REFERENCE_ZONE_NOT_FOUND = "REFERENCE_ZONE_NOT_FOUND"
    WORKSPACE_CODE_UNAVAILABLE = "WORKSPACE_CODE_UNAVAILABLE"
    STORE_NAME_REQUIRED = "STORE_NAME_REQUIRED"
    TRANSACTION_REQUIRED = "TRANSACTION_REQUIRED"
    SUPERADMIN_NOT_FOUND = "SUPERADMIN_NOT_FOUND"

    # single-entity creates
    ORGANIZATION_CREATE_FAILED = "ORGANIZATION_CREATE_FAILED"
    WORKSPACE_CREATE_FAILED = "WORKSPACE_CREATE_FAILED"
    LOCATION_CREATE_FAILED = "LOCATION_CREATE_FAILED"
    PAYMENT_CHANNEL_CREATE_FAILED = "PAYMENT_CHANNEL_CREATE_FAILED"
    ROLE_CREATE_FAILED = "ROLE_CREATE_FAILED"
    ADMIN_CREATE_FAILED = "ADMIN_CREATE_FAILED"
    LEDGER_INIT_FAILED = "LEDGER_INIT_FAILED"
    LEDGER_INCOMPLETE = "LEDGER_INCOMPLETE"

    # read-back verification after a privileged write
    LOCATION_ASSIGN_FAILED = "LOCATION_ASSIGN_FAILED"
    PAYMENT_CHANNEL_ASSIGN_FAILED = "PAYMENT_CHANNEL_ASSIGN_FAILED"
    ROLE_ASSIGN_FAILED = "ROLE_ASSIGN_FAILED"
    IDENTITY_ASSIGN_FAILED = "IDENTITY_ASSIGN_FAILED"

    PROVISIONING_FAILED = "PROVISIONING_FAILED"


VALIDATION_CODES = frozenset(
    {
        ErrorCode.VALIDATION_FAILED,
        ErrorCode.INVALID_PHONE_NUMBER,
        ErrorCode.INVALID_EMAIL,
        ErrorCode.EMAIL_ALREADY_REGISTERED,
        ErrorCode.UNSUPPORTED_CURRENCY,
        ErrorCode.REFERENCE_ZONE_NOT_FOUND,
        ErrorCode.WORKSPACE_CODE_UNAVAILABLE,
        ErrorCode.STORE_NAME_REQUIRED,
    }
)


class ProvisioningError(APIException):
    """
    Coded application error raised by the provisioning flow.

    `code` is stable and inspectable by callers; the underlying exception
    (if any) is kept on `__cause__`.
    Flows through the global DRF exception handler like ConflictError does.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Provisioning failed."
    default_code = ErrorCode.PROVISIONING_FAILED

    def __init__(
        self,
        code: str,
        message: Optional[str] = None,
        *,
        component: Optional[str] = None,
        stage: Optional[str] = None,
    ):
        super().__init__(detail=message or self.default_detail, code=code)
        self.code = code
        self.message = message or self.default_detail
        self.component = component
        self.stage = stage
        if code in VALIDATION_CODES:
            self.status_code = status.HTTP_400_BAD_REQUEST

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @property
    def root_code(self) -> str:
        """
        Innermost coded cause (e.g. ROLE_ASSIGN_FAILED under PROVISIONING_FAILED).
        """
        code = self.code
        cause = self.__cause__
        while cause is not None:
            if isinstance(cause, ProvisioningError):
                code = cause.code
            cause = cause.__cause__
        return code


def create_error(code: str, message: str) -> ProvisioningError:
    return ProvisioningError(code, message)


def wrap_error(error: BaseException, code: str) -> ProvisioningError:
    """
    Coded errors pass through unchanged so the most specific code survives.
    Anything else is wrapped with `code`, keeping the original as the cause.
    """
    if isinstance(error, ProvisioningError):
        return error

    wrapped = ProvisioningError(code, str(error) or error.__class__.__name__)
    wrapped.__cause__ = error
    wrapped.__suppress_context__ = True
    return wrapped


def log_error(component: str, error: BaseException, stage: str) -> None:
    code = getattr(error, "code", None) if isinstance(error, ProvisioningError) else None
    logger.error(
        "[%s] %s failed: %s",
        component,
        stage,
        error,
        exc_info=error,
        extra={"component": component, "stage": stage, "error_code": code},
    )
