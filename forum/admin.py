# forum/admin.py
from django.contrib import admin
from forum.models import ForumPost, ForumReply


class ForumReplyInline(admin.TabularInline):
    model = ForumReply
    fk_name = "post"
    extra = 0
    fields = ["author", "content", "parent_reply", "is_flagged", "is_moderated"]
    raw_id_fields = ["author", "parent_reply"]


@admin.register(ForumPost)
class ForumPostAdmin(admin.ModelAdmin):
    list_display = ["title", "category", "author", "is_pinned", "is_locked", "is_flagged", "views", "created_at"]
    list_filter = ["category", "is_pinned", "is_locked", "is_flagged", "is_moderated"]
    search_fields = ["title", "description", "author__username"]
    readonly_fields = ["views", "created_at", "updated_at"]
    exclude = ["upvotes", "downvotes"]
    inlines = [ForumReplyInline]


@admin.register(ForumReply)
class ForumReplyAdmin(admin.ModelAdmin):
    list_display = ["post", "author", "is_flagged", "is_moderated", "created_at"]
    list_filter = ["is_flagged", "is_moderated"]
    search_fields = ["content", "author__username"]
    exclude = ["upvotes", "downvotes"]
