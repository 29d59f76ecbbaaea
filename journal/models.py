# journal/models.py
from django.db import models
from django.conf import settings
from model_utils import FieldTracker
from core.choices import FLAG_REASON_CHOICES, JOURNAL_MOOD_CHOICES


class JournalEntry(models.Model):
    """An entry on the feelings wall"""
    MOOD_CHOICES = JOURNAL_MOOD_CHOICES

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='journal_entries'
    )
    content = models.CharField(max_length=2000)
    mood = models.CharField(max_length=20, choices=MOOD_CHOICES)
    is_anonymous = models.BooleanField(default=True)
    is_public = models.BooleanField(default=True)
    tags = models.JSONField(default=list, blank=True)
    is_flagged = models.BooleanField(default=False)
    flag_reason = models.CharField(
        max_length=20,
        choices=FLAG_REASON_CHOICES,
        null=True,
        blank=True
    )
    is_moderated = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    tracker = FieldTracker(fields=['is_flagged', 'is_moderated'])

    class Meta:
        verbose_name_plural = "Journal Entries"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['author', '-created_at'], name='journal_author_created_idx'),
            models.Index(fields=['is_public', 'is_moderated'], name='journal_public_mod_idx'),
        ]

    def __str__(self):
        return f"{self.get_mood_display()} - {self.created_at:%Y-%m-%d}" if self.created_at else self.mood

    def toggle_reaction(self, user, reaction_type):
        """
        Remove the user's reaction of this type if present, add it otherwise.
        Returns True when the reaction was added.
        """
        existing = self.reactions.filter(user=user, reaction_type=reaction_type)
        if existing.exists():
            existing.delete()
            return False
        self.reactions.create(user=user, reaction_type=reaction_type)
        return True


class JournalReaction(models.Model):
    REACTION_CHOICES = [
        ('heart', 'Heart'),
        ('hug', 'Hug'),
        ('support', 'Support'),
        ('understand', 'Understand'),
    ]

    entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.CASCADE,
        related_name='reactions'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='journal_reactions'
    )
    reaction_type = models.CharField(max_length=20, choices=REACTION_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user} {self.reaction_type} on entry {self.entry_id}"


class JournalComment(models.Model):
    entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.CASCADE,
        related_name='comments'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='journal_comments'
    )
    content = models.CharField(max_length=500)
    is_anonymous = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"Comment by {self.user} on entry {self.entry_id}"
