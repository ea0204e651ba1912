# pos_core/payments/admin.py
from django.contrib import admin

from pos_core.payments.models import PaymentChannel


@admin.register(PaymentChannel)
class PaymentChannelAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "handler", "ledger_account_code", "is_enabled")
    list_filter = ("handler", "is_enabled")
    search_fields = ("code", "name")
    readonly_fields = ("id", "created_at", "updated_at")
