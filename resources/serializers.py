# resources/serializers.py
from rest_framework import serializers
from resources.models import Resource
from users.serializers import AuthorSerializer
from utils.validators import validate_tags


class ResourceSerializer(serializers.ModelSerializer):
    author = AuthorSerializer(read_only=True)
    tags = serializers.JSONField(required=False)
    likes = serializers.SerializerMethodField()

    class Meta:
        model = Resource
        fields = [
            "id",
            "title",
            "description",
            "content",
            "category",
            "resource_type",
            "media_url",
            "thumbnail",
            "author",
            "tags",
            "is_published",
            "is_featured",
            "views",
            "likes",
            "reading_time",
            "difficulty",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["author", "views", "likes", "created_at", "updated_at"]

    def get_likes(self, obj) -> int:
        count = getattr(obj, "likes_count", None)
        return count if count is not None else obj.likes.count()

    def validate_tags(self, value):
        return validate_tags(value)

    def validate_reading_time(self, value):
        if value < 1:
            raise serializers.ValidationError("Reading time must be at least 1 minute")
        return value


class ResourceModerationSerializer(serializers.ModelSerializer):
    """Admins may only publish or feature a resource from the console."""

    class Meta:
        model = Resource
        fields = ["is_published", "is_featured"]
