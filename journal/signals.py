from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from journal.models import JournalEntry
import logging

logger = logging.getLogger(__name__)


@receiver(post_save, sender=JournalEntry)
def handle_journal_entry_save(sender, instance, created, **kwargs):
    """Record flag and moderation transitions for the moderation log"""
    if created:
        logger.debug(f"Journal entry {instance.id} created by user {instance.author_id}")
        return

    if instance.tracker.has_changed('is_flagged') and instance.is_flagged:
        logger.info(f"Journal entry {instance.id} flagged as {instance.flag_reason}")
    if instance.tracker.has_changed('is_moderated') and instance.is_moderated:
        logger.info(f"Journal entry {instance.id} moderated")


@receiver(post_delete, sender=JournalEntry)
def handle_journal_entry_delete(sender, instance, **kwargs):
    logger.info(f"Journal entry {instance.id} deleted")
