# forum/serializers.py
from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field
from forum.models import ForumPost, ForumReply, VotableContent
from users.serializers import AuthorSerializer
from utils.validators import validate_tags


class VotableContentSerializer(serializers.ModelSerializer):
    """
    Shared representation of posts and replies.

    Anonymous content shows no author except to the author and admins, and
    vote sets are reported as counts.
    """
    author = serializers.SerializerMethodField()
    upvotes = serializers.SerializerMethodField()
    downvotes = serializers.SerializerMethodField()

    @extend_schema_field(AuthorSerializer(allow_null=True))
    def get_author(self, obj):
        request = self.context.get("request")
        viewer = getattr(request, "user", None)
        is_privileged = viewer is not None and viewer.is_authenticated and (
            viewer.pk == obj.author_id or viewer.is_admin
        )
        if obj.is_anonymous and not is_privileged:
            return None
        return AuthorSerializer(obj.author).data

    def get_upvotes(self, obj) -> int:
        count = getattr(obj, "upvotes_count", None)
        return count if count is not None else obj.upvotes.count()

    def get_downvotes(self, obj) -> int:
        count = getattr(obj, "downvotes_count", None)
        return count if count is not None else obj.downvotes.count()


class ForumPostSerializer(VotableContentSerializer):
    tags = serializers.JSONField(required=False)
    reply_count = serializers.SerializerMethodField()

    class Meta:
        model = ForumPost
        fields = [
            "id",
            "title",
            "description",
            "category",
            "author",
            "is_anonymous",
            "is_pinned",
            "is_locked",
            "views",
            "upvotes",
            "downvotes",
            "reply_count",
            "tags",
            "is_flagged",
            "is_moderated",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "is_pinned",
            "is_locked",
            "views",
            "is_flagged",
            "is_moderated",
            "created_at",
            "updated_at",
        ]

    def get_reply_count(self, obj) -> int:
        count = getattr(obj, "reply_count", None)
        return count if count is not None else obj.replies.count()

    def validate_tags(self, value):
        return validate_tags(value)


class ForumReplySerializer(VotableContentSerializer):
    parent_reply = serializers.PrimaryKeyRelatedField(
        queryset=ForumReply.objects.all(), required=False, allow_null=True
    )

    class Meta:
        model = ForumReply
        fields = [
            "id",
            "post",
            "author",
            "content",
            "is_anonymous",
            "parent_reply",
            "upvotes",
            "downvotes",
            "is_flagged",
            "is_moderated",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["post", "is_flagged", "is_moderated", "created_at", "updated_at"]

    def validate_parent_reply(self, parent):
        """Replies nest one level deep, under a reply of the same post"""
        if parent is None:
            return parent
        post = self.context.get("post")
        if post is not None and parent.post_id != post.pk:
            raise serializers.ValidationError("Parent reply belongs to another post")
        if parent.parent_reply_id is not None:
            raise serializers.ValidationError("Replies can only be nested one level deep")
        return parent


class VoteInputSerializer(serializers.Serializer):
    vote_type = serializers.ChoiceField(
        choices=VotableContent.VOTE_CHOICES,
        error_messages={"invalid_choice": "Invalid vote type"},
    )
