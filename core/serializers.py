# core/serializers.py
from rest_framework import serializers

from core.choices import FLAG_REASON_CHOICES


class FlagInputSerializer(serializers.Serializer):
    """Body of a user report on journal or forum content."""

    reason = serializers.ChoiceField(choices=FLAG_REASON_CHOICES)
