# messaging/admin.py
from django.contrib import admin
from messaging.models import Chat, ChatParticipant, Message


class ChatParticipantInline(admin.TabularInline):
    model = ChatParticipant
    extra = 0
    readonly_fields = ["joined_at"]


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    list_display = ["id", "chat_type", "is_active", "last_message_time"]
    list_filter = ["chat_type", "is_active"]
    inlines = [ChatParticipantInline]
    raw_id_fields = ["last_message"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["id", "chat", "sender", "message_type", "is_read", "is_edited", "is_deleted", "created_at"]
    list_filter = ["message_type", "is_read", "is_deleted"]
    search_fields = ["content", "sender__username"]
    readonly_fields = ["created_at", "updated_at", "edited_at"]
