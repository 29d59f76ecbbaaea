# mood/serializers.py
from rest_framework import serializers
from mood.models import MoodEntry
from utils.validators import validate_choice_list, validate_tags


class MoodEntrySerializer(serializers.ModelSerializer):
    activities = serializers.JSONField(required=False)
    tags = serializers.JSONField(required=False)

    class Meta:
        model = MoodEntry
        fields = [
            "id",
            "user",
            "mood",
            "intensity",
            "activities",
            "notes",
            "sleep_hours",
            "stress_level",
            "energy_level",
            "is_private",
            "tags",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["user", "created_at", "updated_at"]

    def validate_activities(self, value):
        return validate_choice_list(value, MoodEntry.ACTIVITY_CHOICES, label="activity")

    def validate_tags(self, value):
        return validate_tags(value)
