# authentication/serializers.py
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q
from rest_framework import serializers

from users.models import Role
from users.serializers import ProfileInputSerializer, UserPreferencesSerializer, apply_profile

User = get_user_model()

DUPLICATE_ACCOUNT_MESSAGE = "User with this email or username already exists"


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    role = serializers.ChoiceField(choices=Role.choices, default=Role.STUDENT)
    profile = ProfileInputSerializer(required=False)

    def validate_password(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def validate(self, attrs):
        if User.objects.filter(
            Q(email__iexact=attrs["email"]) | Q(username=attrs["username"])
        ).exists():
            raise serializers.ValidationError(DUPLICATE_ACCOUNT_MESSAGE)
        return attrs

    @transaction.atomic
    def create(self, validated_data):
        profile = validated_data.pop("profile", None) or {}
        user = User.objects.create_user(
            username=validated_data["username"],
            email=validated_data["email"],
            password=validated_data["password"],
            role=validated_data["role"],
        )
        if profile:
            apply_profile(user, profile)
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class ProfileUpdateSerializer(serializers.Serializer):
    profile = ProfileInputSerializer(required=False)
    preferences = UserPreferencesSerializer(required=False)

    @transaction.atomic
    def update(self, instance, validated_data):
        profile = validated_data.get("profile")
        if profile:
            apply_profile(instance, profile)

        preferences = validated_data.get("preferences")
        if preferences:
            UserPreferencesSerializer().update(instance.preferences, preferences)

        instance.refresh_from_db()
        return instance


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_new_password(self, value):
        try:
            validate_password(value, user=self.context["request"].user)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value
