# adminpanel/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers
from forum.models import ForumPost
from journal.models import JournalEntry

User = get_user_model()

MODERATION_ACTIONS = {
    "approve": "approved",
    "reject": "rejected",
    "delete": "deleted",
}


class ModerationAuthorSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email"]
        read_only_fields = fields


class FlaggedItemSerializer(serializers.ModelSerializer):
    """Flagged content as listed in the moderation queue, tagged with its ``type``"""
    author = ModerationAuthorSerializer(read_only=True)
    type = serializers.SerializerMethodField()

    content_type = None

    def get_type(self, obj) -> str:
        return self.content_type


class FlaggedJournalSerializer(FlaggedItemSerializer):
    content_type = "journal"

    class Meta:
        model = JournalEntry
        fields = [
            "id",
            "type",
            "author",
            "content",
            "mood",
            "is_anonymous",
            "is_public",
            "is_flagged",
            "flag_reason",
            "is_moderated",
            "created_at",
        ]
        read_only_fields = fields


class FlaggedForumSerializer(FlaggedItemSerializer):
    content_type = "forum"

    class Meta:
        model = ForumPost
        fields = [
            "id",
            "type",
            "author",
            "title",
            "description",
            "category",
            "is_anonymous",
            "is_flagged",
            "flag_reason",
            "is_moderated",
            "created_at",
        ]
        read_only_fields = fields


class ModerationActionSerializer(serializers.Serializer):
    action = serializers.CharField()
    reason = serializers.CharField(required=False, allow_blank=True)


class RecentUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email", "role", "created_at"]
        read_only_fields = fields
