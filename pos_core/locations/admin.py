# pos_core/locations/admin.py
from django.contrib import admin

from pos_core.locations.models import Location


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("name", "description", "created_at")
    search_fields = ("name",)
    readonly_fields = ("id", "created_at", "updated_at")
