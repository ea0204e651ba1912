# pos_core/workspaces/apps.py
from django.apps import AppConfig


class WorkspacesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pos_core.workspaces"
