# pos_core/provisioning/apps.py
from django.apps import AppConfig


class ProvisioningConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pos_core.provisioning"

    def ready(self) -> None:
        from pos_core.provisioning import subscribers  # noqa: F401
