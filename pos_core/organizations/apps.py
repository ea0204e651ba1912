# pos_core/organizations/apps.py
from django.apps import AppConfig


class OrganizationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pos_core.organizations"
