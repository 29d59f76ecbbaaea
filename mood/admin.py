# mood/admin.py
from django.contrib import admin
from mood.models import MoodEntry


@admin.register(MoodEntry)
class MoodEntryAdmin(admin.ModelAdmin):
    list_display = ["user", "mood", "intensity", "stress_level", "energy_level", "created_at"]
    list_filter = ["mood", "is_private", "created_at"]
    search_fields = ["user__username", "notes"]
    readonly_fields = ["created_at", "updated_at"]
