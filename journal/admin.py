# journal/admin.py
from django.contrib import admin
from journal.models import JournalEntry, JournalReaction, JournalComment


class JournalCommentInline(admin.TabularInline):
    model = JournalComment
    extra = 0


class JournalReactionInline(admin.TabularInline):
    model = JournalReaction
    extra = 0


@admin.register(JournalEntry)
class JournalEntryAdmin(admin.ModelAdmin):
    list_display = ["author", "mood", "is_public", "is_flagged", "is_moderated", "created_at"]
    list_filter = ["mood", "is_public", "is_flagged", "is_moderated", "created_at"]
    search_fields = ["content", "author__username"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [JournalReactionInline, JournalCommentInline]
    fieldsets = [
        ("Basic Information", {"fields": ["author", "content", "mood"]}),
        ("Visibility", {"fields": ["is_anonymous", "is_public", "tags"]}),
        ("Moderation", {"fields": ["is_flagged", "flag_reason", "is_moderated"]}),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]
