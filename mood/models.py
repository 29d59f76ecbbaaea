# mood/models.py
from datetime import datetime, time, timedelta

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from core.choices import JOURNAL_MOOD_CHOICES


def day_bounds(day=None):
    """Aware ``[midnight, next midnight)`` of a calendar day in the current time zone."""
    day = day or timezone.localdate()
    start = timezone.make_aware(datetime.combine(day, time.min))
    return start, start + timedelta(days=1)


class MoodEntryQuerySet(models.QuerySet):
    def for_user(self, user):
        return self.filter(user=user)

    def on_day(self, day=None):
        start, end = day_bounds(day)
        return self.filter(created_at__gte=start, created_at__lt=end)

    def since_days(self, days):
        return self.filter(created_at__gte=timezone.now() - timedelta(days=days))


class MoodEntry(models.Model):
    MOOD_CHOICES = JOURNAL_MOOD_CHOICES + [
        ("angry", "Angry"),
        ("frustrated", "Frustrated"),
    ]

    ACTIVITY_CHOICES = [
        ("exercise", "Exercise"),
        ("meditation", "Meditation"),
        ("socializing", "Socializing"),
        ("studying", "Studying"),
        ("sleeping", "Sleeping"),
        ("eating", "Eating"),
        ("hobby", "Hobby"),
        ("work", "Work"),
        ("other", "Other"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="mood_entries"
    )
    mood = models.CharField(max_length=20, choices=MOOD_CHOICES)
    intensity = models.PositiveSmallIntegerField(
        default=5, validators=[MinValueValidator(1), MaxValueValidator(10)]
    )
    activities = models.JSONField(default=list, blank=True)
    notes = models.CharField(max_length=500, blank=True, default="")
    sleep_hours = models.FloatField(
        null=True, blank=True, validators=[MinValueValidator(0), MaxValueValidator(24)]
    )
    stress_level = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(1), MaxValueValidator(10)]
    )
    energy_level = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(1), MaxValueValidator(10)]
    )
    is_private = models.BooleanField(default=True)
    tags = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MoodEntryQuerySet.as_manager()

    class Meta:
        verbose_name_plural = "Mood entries"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["user", "created_at"], name="mood_user_created_idx")]

    def __str__(self):
        return f"{self.user} - {self.mood} ({self.intensity})"
