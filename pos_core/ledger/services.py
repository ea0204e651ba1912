# pos_core/ledger/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from django.db import IntegrityError, transaction

from pos_core.common.errors import ErrorCode, ProvisioningError, log_error, wrap_error
from pos_core.ledger.constants import ACCOUNT_CATALOG, REQUIRED_ACCOUNT_CODES, AccountSpec
from pos_core.ledger.models import LedgerAccount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerInitResult:
    created: List[str] = field(default_factory=list)
    existing: List[str] = field(default_factory=list)

    @property
    def seen(self) -> set[str]:
        return set(self.created) | set(self.existing)

    def missing_codes(self, required: Iterable[str] = REQUIRED_ACCOUNT_CODES) -> List[str]:
        seen = self.seen
        return [code for code in required if code not in seen]


class LedgerBootstrapService:
    """
    Chart-of-accounts bootstrap for a workspace.

    Idempotent: safe to call from provisioning, from `ensure_ledger_accounts`,
    or concurrently from two code paths. A unique violation on (workspace, code)
    means another writer got there first and is counted as existing.

    Callers check `result.missing_codes()` instead of re-reading the table.
    """
    COMPONENT = "LedgerBootstrapService"

    @staticmethod
    def initialize_for_workspace(*, workspace_id: UUID) -> LedgerInitResult:
        try:
            return LedgerBootstrapService._initialize(workspace_id=workspace_id)
        except Exception as exc:
            log_error(LedgerBootstrapService.COMPONENT, exc, "Ledger bootstrap")
            raise wrap_error(exc, ErrorCode.LEDGER_INIT_FAILED)

    @staticmethod
    def _initialize(*, workspace_id: UUID) -> LedgerInitResult:
        created: List[str] = []
        existing: List[str] = []
        by_code: Dict[str, LedgerAccount] = {}

        for spec in ACCOUNT_CATALOG:
            parent = None
            if spec.parent_code:
                parent = by_code.get(spec.parent_code)
                if parent is None:
                    raise ProvisioningError(
                        ErrorCode.LEDGER_INCOMPLETE,
                        f"{spec.parent_code} parent account not found for workspace {workspace_id}",
                    )

            account = LedgerAccount.objects.filter(workspace_id=workspace_id, code=spec.code).first()
            if account is None:
                account, was_created = LedgerBootstrapService._create_account(
                    workspace_id=workspace_id, spec=spec, parent=parent
                )
                (created if was_created else existing).append(spec.code)
            else:
                existing.append(spec.code)
                LedgerBootstrapService._reconcile_existing(account=account, spec=spec, parent=parent)

            by_code[spec.code] = account

        logger.info(
            "Chart of accounts initialized for workspace %s: %d created, %d already existed",
            workspace_id,
            len(created),
            len(existing),
        )
        return LedgerInitResult(created=created, existing=existing)

    @staticmethod
    def _create_account(*, workspace_id: UUID, spec: AccountSpec, parent: Optional[LedgerAccount]):
        try:
            # savepoint: a unique violation must not poison the caller's transaction
            with transaction.atomic():
                account = LedgerAccount.objects.create(
                    workspace_id=workspace_id,
                    code=spec.code,
                    name=spec.name,
                    type=spec.type,
                    is_active=True,
                    is_parent=spec.is_parent,
                    parent_account=parent,
                )
        except IntegrityError:
            account = LedgerAccount.objects.filter(workspace_id=workspace_id, code=spec.code).first()
            if account is None:
                logger.error("Failed to create account %s for workspace %s", spec.code, workspace_id)
                raise
            logger.warning(
                "Account %s already exists for workspace %s (concurrent create)",
                spec.code,
                workspace_id,
            )
            return account, False

        logger.info("Created account %s (%s) for workspace %s", spec.code, spec.type, workspace_id)
        return account, True

    @staticmethod
    def _reconcile_existing(*, account: LedgerAccount, spec: AccountSpec, parent: Optional[LedgerAccount]) -> None:
        update_fields = []
        if spec.is_parent and not account.is_parent:
            account.is_parent = True
            update_fields.append("is_parent")
        if parent is not None and account.parent_account_id is None:
            account.parent_account = parent
            update_fields.append("parent_account")
        if update_fields:
            account.save(update_fields=update_fields + ["updated_at"])

        if account.type != spec.type:
            logger.warning(
                "Account %s for workspace %s has incorrect type: expected %s, found %s. "
                "Consider manual correction.",
                spec.code,
                account.workspace_id,
                spec.type,
                account.type,
            )

    @staticmethod
    def verify_workspace_accounts(*, workspace_id: UUID) -> None:
        present = set(
            LedgerAccount.objects.filter(
                workspace_id=workspace_id,
                code__in=REQUIRED_ACCOUNT_CODES,
                is_active=True,
            ).values_list("code", flat=True)
        )
        missing = [code for code in REQUIRED_ACCOUNT_CODES if code not in present]
        if missing:
            raise ProvisioningError(
                ErrorCode.LEDGER_INCOMPLETE,
                f"Missing required accounts for workspace {workspace_id}: {', '.join(missing)}",
            )
