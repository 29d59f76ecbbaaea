# messaging/serializers.py
from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field
from messaging.models import Chat, ChatType, Message, MessageRead, MessageType
from users.serializers import ParticipantSerializer


class MessageReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = MessageRead
        fields = ["user", "read_at"]
        read_only_fields = fields


class MessageSerializer(serializers.ModelSerializer):
    sender = ParticipantSerializer(read_only=True)
    read_by = MessageReadSerializer(source="read_receipts", many=True, read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "chat",
            "sender",
            "content",
            "message_type",
            "media_url",
            "is_read",
            "read_by",
            "is_edited",
            "edited_at",
            "is_deleted",
            "created_at",
        ]
        read_only_fields = [
            "chat",
            "is_read",
            "is_edited",
            "edited_at",
            "is_deleted",
            "created_at",
        ]


class MessageEditSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=2000)


class ChatSerializer(serializers.ModelSerializer):
    participants = ParticipantSerializer(many=True, read_only=True)
    last_message = MessageSerializer(read_only=True)
    unread_count = serializers.SerializerMethodField()

    class Meta:
        model = Chat
        fields = [
            "id",
            "participants",
            "chat_type",
            "is_active",
            "last_message",
            "last_message_time",
            "unread_count",
            "created_at",
        ]
        read_only_fields = fields

    def get_unread_count(self, obj) -> int:
        """Unread counter of the requesting participant"""
        annotated = getattr(obj, "caller_unread_count", None)
        if annotated is not None:
            return annotated
        request = self.context.get("request")
        if request is None:
            return 0
        membership = obj.memberships.filter(user=request.user).first()
        return membership.unread_count if membership else 0


class ChatCreateSerializer(serializers.Serializer):
    participant_id = serializers.IntegerField(required=False, allow_null=True)
    counsellor_id = serializers.IntegerField(required=False, allow_null=True)
    chat_type = serializers.ChoiceField(
        choices=ChatType.choices, default=ChatType.STUDENT_COUNSELLOR
    )

    def validate(self, attrs):
        target_id = attrs.get("participant_id") or attrs.get("counsellor_id")
        if not target_id:
            raise serializers.ValidationError("Participant ID or counsellor ID is required")
        attrs["target_id"] = target_id
        return attrs


class MessageCreateSerializer(serializers.ModelSerializer):
    message_type = serializers.ChoiceField(choices=MessageType.choices, default=MessageType.TEXT)

    class Meta:
        model = Message
        fields = ["content", "message_type", "media_url"]
