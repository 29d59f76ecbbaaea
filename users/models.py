# users/models.py
from django.db import models
from django.contrib.auth.models import AbstractUser
from django.conf import settings
from model_utils import FieldTracker
import logging

logger = logging.getLogger(__name__)


class Role(models.TextChoices):
    STUDENT = "student", "Student"
    COUNSELLOR = "counsellor", "Counsellor"
    ADMIN = "admin", "Admin"


class User(AbstractUser):
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.STUDENT,
    )
    email = models.EmailField(unique=True)
    is_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    tracker = FieldTracker(["role", "is_active", "is_verified"])

    REQUIRED_FIELDS = ["email"]

    class Meta:
        db_table = "users_user"
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role", "is_active"], name="users_role_active_idx"),
        ]

    def __str__(self):
        return self.username

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def is_counsellor(self):
        return self.role == Role.COUNSELLOR

    def save(self, *args, **kwargs):
        is_new = self._state.adding
        super().save(*args, **kwargs)

        if is_new:
            return
        if self.tracker.has_changed("role"):
            logger.info(
                f"User {self.username} role changed from {self.tracker.previous('role')} to {self.role}"
            )
        if self.tracker.has_changed("is_active"):
            logger.info(
                f"User {self.username} {'activated' if self.is_active else 'deactivated'}"
            )


class UserProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    bio = models.TextField(blank=True, default="")
    avatar = models.URLField(max_length=500, blank=True, default="")
    specialization = models.CharField(max_length=200, blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Profile"
        verbose_name_plural = "Profiles"

    def __str__(self):
        return f"{self.user.username}'s Profile"


class UserPreferences(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="preferences",
    )
    dark_mode = models.BooleanField(default=False)
    language = models.CharField(
        max_length=10,
        choices=settings.LANGUAGES,
        default="en",
    )
    notification_preferences = models.JSONField(default=dict, blank=True)
    extra = models.JSONField(default=dict, blank=True)

    def get_notification_settings(self):
        prefs = self.notification_preferences or {}
        return ", ".join(f"{k}: {v}" for k, v in prefs.items())

    get_notification_settings.short_description = "Notifications"

    class Meta:
        verbose_name_plural = "User preferences"

    def __str__(self):
        return f"{self.user.username}'s Preferences"
