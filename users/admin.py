from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User, UserProfile, UserPreferences


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False


@admin.register(User)
class PeerSupportUserAdmin(UserAdmin):
    list_display = ["username", "email", "role", "is_active", "is_verified", "created_at"]
    list_filter = ["role", "is_active", "is_verified"]
    search_fields = ["username", "email", "first_name", "last_name"]
    ordering = ["-created_at"]
    inlines = [UserProfileInline]
    fieldsets = UserAdmin.fieldsets + (
        ("Platform", {"fields": ("role", "is_verified")}),
    )


@admin.register(UserPreferences)
class UserPreferencesAdmin(admin.ModelAdmin):
    list_display = ("user", "language", "dark_mode", "get_notification_settings")
    search_fields = ("user__username", "user__email")

    def get_queryset(self, request):
        """Optimize queries by selecting related user"""
        return super().get_queryset(request).select_related("user")

    def has_add_permission(self, request):
        """Prevent manual creation as preferences are auto-created"""
        return False
