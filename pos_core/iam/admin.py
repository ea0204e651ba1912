# pos_core/iam/admin.py
from django.contrib import admin

from pos_core.iam.models import AdministratorProfile, Role, UserRole


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("code", "description", "permissions_version", "created_at")
    search_fields = ("code",)
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "created_at")
    search_fields = ("user__username", "role__code")


@admin.register(AdministratorProfile)
class AdministratorProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "first_name", "last_name", "email_address", "authorization_status")
    list_filter = ("authorization_status",)
    search_fields = ("user__username", "email_address", "last_name")
    readonly_fields = ("id", "created_at", "updated_at")
