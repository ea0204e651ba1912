# pos_core/provisioning/services/location.py
from __future__ import annotations

import logging
from uuid import UUID

from pos_core.audit.services import AuditService
from pos_core.common.errors import ErrorCode, ProvisioningError, log_error, wrap_error
from pos_core.locations.models import Location
from pos_core.locations.services import LocationService
from pos_core.provisioning.relations import relate_and_verify
from pos_core.provisioning.types import RegistrationInput
from pos_core.workspaces.events import publish_assignment_event

logger = logging.getLogger(__name__)


class LocationProvisioner:
    """
    Store location: validated create, then privileged relate + read-back.
    """
    COMPONENT = "LocationProvisioner"

    def create_and_assign_location(self, ctx, input: RegistrationInput, workspace_id: UUID) -> Location:
        try:
            store_name = (input.store_name or "").strip()
            if not store_name:
                raise ProvisioningError(
                    ErrorCode.STORE_NAME_REQUIRED,
                    "Store name is required to complete registration.",
                )
            store_address = (input.store_address or "").strip()

            location = LocationService.create(name=store_name, description=store_address)

            relate_and_verify(
                ctx,
                workspace_id=workspace_id,
                relation="locations",
                entity_id=location.id,
                error_code=ErrorCode.LOCATION_ASSIGN_FAILED,
            )

            publish_assignment_event(workspace_id=workspace_id, entity_type="location", entity_id=location.id)
            AuditService.log_entity_created(
                ctx,
                "Location",
                location.id,
                snapshot={"name": location.name, "description": location.description},
                metadata={
                    "workspace_id": str(workspace_id),
                    "store_name": store_name,
                    "store_address": store_address,
                },
            )
            logger.info("Location %s assigned to workspace %s", location.id, workspace_id)
            return location
        except Exception as exc:
            log_error(self.COMPONENT, exc, "Location provisioning")
            raise wrap_error(exc, ErrorCode.LOCATION_CREATE_FAILED)
