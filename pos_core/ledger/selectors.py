# pos_core/ledger/selectors.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from pos_core.ledger.models import LedgerAccount


def get_account_or_none(*, workspace_id: UUID, code: str) -> Optional[LedgerAccount]:
    return LedgerAccount.objects.filter(workspace_id=workspace_id, code=code, is_active=True).first()
