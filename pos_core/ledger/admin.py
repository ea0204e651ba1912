# pos_core/ledger/admin.py
from django.contrib import admin

from pos_core.ledger.models import LedgerAccount


@admin.register(LedgerAccount)
class LedgerAccountAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "type", "workspace", "is_parent", "is_active")
    list_filter = ("type", "is_active", "is_parent")
    search_fields = ("code", "name", "workspace__code")
    readonly_fields = ("id", "created_at", "updated_at")
