from pos_core.provisioning.services.identity import IdentityProvisioner  # noqa: F401
from pos_core.provisioning.services.location import LocationProvisioner  # noqa: F401
from pos_core.provisioning.services.orchestrator import TenantProvisioner  # noqa: F401
from pos_core.provisioning.services.organization import OrganizationProvisioner  # noqa: F401
from pos_core.provisioning.services.payment import PaymentChannelProvisioner  # noqa: F401
from pos_core.provisioning.services.registration import RegistrationService  # noqa: F401
from pos_core.provisioning.services.role import RoleProvisioner  # noqa: F401
from pos_core.provisioning.services.workspace import WorkspaceProvisioner  # noqa: F401
