# pos_core/audit/admin.py
from django.contrib import admin

from pos_core.audit.models import AuditEvent


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ("event_code", "entity_type", "entity_id", "workspace_id", "occurred_at")
    list_filter = ("event_code", "entity_type")
    search_fields = ("entity_id", "event_code")
    ordering = ("-occurred_at",)
    readonly_fields = ("id", "occurred_at", "snapshot", "metadata")
