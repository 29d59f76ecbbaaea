# resources/admin.py
from django.contrib import admin
from resources.models import Resource


@admin.register(Resource)
class ResourceAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "resource_type", "author", "is_published", "is_featured", "views")
    list_filter = ("category", "resource_type", "difficulty", "is_published", "is_featured")
    search_fields = ("title", "description", "author__username")
    filter_horizontal = ("likes",)
    readonly_fields = ("views", "created_at", "updated_at")
