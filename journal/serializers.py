# journal/serializers.py
from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field
from journal.models import JournalEntry, JournalReaction, JournalComment
from users.serializers import AuthorSerializer
from utils.validators import validate_tags


class JournalReactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = JournalReaction
        fields = ["id", "user", "reaction_type", "created_at"]
        read_only_fields = fields


class PublicJournalReactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = JournalReaction
        fields = ["id", "reaction_type", "created_at"]
        read_only_fields = fields


class JournalCommentSerializer(serializers.ModelSerializer):
    user = serializers.SerializerMethodField()

    class Meta:
        model = JournalComment
        fields = ["id", "user", "content", "is_anonymous", "created_at"]
        read_only_fields = ["id", "user", "created_at"]

    @extend_schema_field(AuthorSerializer(allow_null=True))
    def get_user(self, obj):
        if obj.is_anonymous:
            return None
        return AuthorSerializer(obj.user).data


class JournalEntrySerializer(serializers.ModelSerializer):
    """Entry as seen by its author"""
    author = AuthorSerializer(read_only=True)
    tags = serializers.JSONField(required=False)
    reactions = JournalReactionSerializer(many=True, read_only=True)
    comments = JournalCommentSerializer(many=True, read_only=True)

    class Meta:
        model = JournalEntry
        fields = [
            "id",
            "author",
            "content",
            "mood",
            "is_anonymous",
            "is_public",
            "tags",
            "reactions",
            "comments",
            "is_flagged",
            "flag_reason",
            "is_moderated",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "author",
            "is_flagged",
            "flag_reason",
            "is_moderated",
            "created_at",
            "updated_at",
        ]

    def validate_tags(self, value):
        return validate_tags(value)


class PublicJournalEntrySerializer(JournalEntrySerializer):
    """Entry on the feelings wall; anonymous entries carry no author at all"""
    author = serializers.SerializerMethodField()
    reactions = PublicJournalReactionSerializer(many=True, read_only=True)

    class Meta(JournalEntrySerializer.Meta):
        fields = [
            "id",
            "author",
            "content",
            "mood",
            "is_anonymous",
            "tags",
            "reactions",
            "comments",
            "created_at",
        ]
        read_only_fields = fields

    @extend_schema_field(AuthorSerializer(allow_null=True))
    def get_author(self, obj):
        if obj.is_anonymous:
            return None
        return AuthorSerializer(obj.author).data


class ReactionInputSerializer(serializers.Serializer):
    reaction_type = serializers.ChoiceField(choices=JournalReaction.REACTION_CHOICES)
