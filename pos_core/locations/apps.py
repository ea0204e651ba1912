# pos_core/locations/apps.py
from django.apps import AppConfig


class LocationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pos_core.locations"
