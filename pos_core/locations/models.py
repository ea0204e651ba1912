# pos_core/locations/models.py
from django.db import models

from pos_core.common.models import UUIDModel


class Location(UUIDModel):
    """
    Physical stock-holding site (store, warehouse).
    Linked to workspaces through Workspace.locations.
    """
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)  # street address for stores

    class Meta:
        db_table = "locations_location"
        indexes = [models.Index(fields=["name"])]

    def __str__(self) -> str:
        return self.name
