# pos_core/organizations/admin.py
from django.contrib import admin

from pos_core.organizations.models import Organization


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at", "updated_at")
    search_fields = ("name",)
    ordering = ("-created_at",)
    readonly_fields = ("id", "created_at", "updated_at")
