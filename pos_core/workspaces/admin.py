# pos_core/workspaces/admin.py
from django.contrib import admin

from pos_core.workspaces.models import Workspace, Zone


@admin.register(Zone)
class ZoneAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


@admin.register(Workspace)
class WorkspaceAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "currency_code", "status", "created_at")
    list_filter = ("status", "currency_code")
    search_fields = ("name", "code")
    ordering = ("-created_at",)
    readonly_fields = ("id", "code", "token", "created_at", "updated_at")
