# users/serializers.py
from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.db import transaction
from drf_spectacular.utils import extend_schema_field
from .models import Role, UserProfile, UserPreferences
import logging

logger = logging.getLogger(__name__)
User = get_user_model()

PROFILE_FIELDS = ("first_name", "last_name", "bio", "avatar", "specialization")
USER_FIELDS_IN_PROFILE = ("first_name", "last_name")


def _get_profile(user):
    try:
        return user.profile
    except UserProfile.DoesNotExist:
        return None


def profile_payload(user, fields=PROFILE_FIELDS):
    """Build the nested ``profile`` object clients see for a user."""
    profile = _get_profile(user)
    payload = {}
    for field in fields:
        if field in USER_FIELDS_IN_PROFILE:
            payload[field] = getattr(user, field)
        else:
            payload[field] = getattr(profile, field, "") if profile else ""
    return payload


def apply_profile(user, data):
    """Merge a partial profile dict into the user and its profile row."""
    profile, _ = UserProfile.objects.get_or_create(user=user)
    user_changed = False
    for field, value in data.items():
        if field in USER_FIELDS_IN_PROFILE:
            setattr(user, field, value)
            user_changed = True
        else:
            setattr(profile, field, value)
    if user_changed:
        user.save(update_fields=[*USER_FIELDS_IN_PROFILE, "updated_at"])
    profile.save()


class ProfileInputSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    bio = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    avatar = serializers.URLField(max_length=500, required=False, allow_blank=True)
    specialization = serializers.CharField(max_length=200, required=False, allow_blank=True)


class UserPreferencesSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserPreferences
        fields = ["dark_mode", "language", "notification_preferences", "extra"]

    def validate_notification_preferences(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Notification preferences must be an object")
        return value

    def validate_extra(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Extra preferences must be an object")
        return value

    def update(self, instance, validated_data):
        # Notification settings merge key by key instead of replacing the object.
        notifications = validated_data.pop("notification_preferences", None)
        if notifications is not None:
            instance.notification_preferences = {
                **(instance.notification_preferences or {}),
                **notifications,
            }
        return super().update(instance, validated_data)


class UserSerializer(serializers.ModelSerializer):
    """Full account representation, shown to the account owner and admins."""

    profile = serializers.SerializerMethodField()
    preferences = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "role",
            "profile",
            "preferences",
            "is_active",
            "is_verified",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    @extend_schema_field(serializers.DictField())
    def get_profile(self, obj):
        return profile_payload(obj)

    @extend_schema_field(UserPreferencesSerializer)
    def get_preferences(self, obj):
        try:
            return UserPreferencesSerializer(obj.preferences).data
        except UserPreferences.DoesNotExist:
            return {}


class PublicUserSerializer(serializers.ModelSerializer):
    """Limited profile shown to other members."""

    profile = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "profile", "role", "is_verified"]
        read_only_fields = fields

    @extend_schema_field(serializers.DictField())
    def get_profile(self, obj):
        return profile_payload(obj, ("first_name", "last_name", "avatar", "bio"))


class AuthorSerializer(serializers.ModelSerializer):
    """Author reference embedded in journal, forum and resource payloads."""

    profile = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "profile"]
        read_only_fields = fields

    @extend_schema_field(serializers.DictField())
    def get_profile(self, obj):
        return profile_payload(obj, ("first_name", "last_name"))


class ParticipantSerializer(AuthorSerializer):
    @extend_schema_field(serializers.DictField())
    def get_profile(self, obj):
        return profile_payload(obj, ("first_name", "last_name", "avatar"))


class CounsellorSerializer(serializers.ModelSerializer):
    profile = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "profile"]
        read_only_fields = fields

    @extend_schema_field(serializers.DictField())
    def get_profile(self, obj):
        return profile_payload(
            obj, ("first_name", "last_name", "bio", "avatar", "specialization")
        )


class AdminUserUpdateSerializer(serializers.Serializer):
    """Only account flags and the role may be changed by an admin."""

    is_active = serializers.BooleanField(required=False)
    is_verified = serializers.BooleanField(required=False)
    role = serializers.ChoiceField(choices=Role.choices, required=False)

    @transaction.atomic
    def update(self, instance, validated_data):
        for field, value in validated_data.items():
            setattr(instance, field, value)
        instance.save()
        logger.info(
            f"Admin updated user {instance.id}: {', '.join(validated_data) or 'no changes'}"
        )
        return instance
