# pos_core/provisioning/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RegistrationInput:
    company_name: str
    currency: str
    admin_first_name: str
    admin_last_name: str
    admin_phone_number: str
    store_name: str
    store_address: str = ""
    admin_email: Optional[str] = None


@dataclass(frozen=True)
class ProvisionResult:
    """
    All ids are opaque strings.
    """
    organization_id: str
    workspace_id: str
    location_id: str
    role_id: str
    administrator_id: str
    identity_id: str

    def as_dict(self) -> dict:
        return {
            "organization_id": self.organization_id,
            "workspace_id": self.workspace_id,
            "location_id": self.location_id,
            "role_id": self.role_id,
            "administrator_id": self.administrator_id,
            "identity_id": self.identity_id,
        }
