# users/signals.py
import logging
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.conf import settings
from users.models import User, UserProfile, UserPreferences

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_user_related_models(sender, instance, created, **kwargs):
    """
    Create the profile and preferences rows that every account carries.
    Uses get_or_create so re-saving a user never duplicates them.
    """
    if not created:
        return

    defaults = settings.USER_SETTINGS["DEFAULT_PREFERENCES"]
    with transaction.atomic():
        profile, profile_created = UserProfile.objects.get_or_create(user=instance)
        if profile_created:
            logger.info(f"Created profile for user {instance.username}")

        preferences, prefs_created = UserPreferences.objects.get_or_create(
            user=instance,
            defaults={
                "dark_mode": defaults["dark_mode"],
                "language": defaults["language"],
                "notification_preferences": dict(defaults["notifications"]),
            },
        )
        if prefs_created:
            logger.info(f"Created preferences for user {instance.username}")
