# forum/models.py
from django.db import models
from django.conf import settings
from core.choices import FLAG_REASON_CHOICES


class VotableContent(models.Model):
    """Flaggable forum content carrying mutually exclusive up/down vote sets"""
    UPVOTE = 'upvote'
    DOWNVOTE = 'downvote'
    VOTE_CHOICES = [
        (UPVOTE, 'Upvote'),
        (DOWNVOTE, 'Downvote'),
    ]

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='%(class)s_set'
    )
    is_anonymous = models.BooleanField(default=True)
    upvotes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='upvoted_%(class)s_set',
        blank=True
    )
    downvotes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='downvoted_%(class)s_set',
        blank=True
    )
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

    class Meta:
        abstract = True

    def cast_vote(self, user, vote_type):
        """
        Apply ``vote_type`` for ``user``: the opposite vote is always cleared
        and repeating the same vote withdraws it.
        """
        if vote_type == self.UPVOTE:
            chosen, opposite = self.upvotes, self.downvotes
        elif vote_type == self.DOWNVOTE:
            chosen, opposite = self.downvotes, self.upvotes
        else:
            raise ValueError(f"Unknown vote type: {vote_type}")

        opposite.remove(user)
        if chosen.filter(pk=user.pk).exists():
            chosen.remove(user)
        else:
            chosen.add(user)

    def vote_counts(self):
        return {"upvotes": self.upvotes.count(), "downvotes": self.downvotes.count()}


class ForumPost(VotableContent):
    CATEGORY_CHOICES = [
        ('general', 'General'),
        ('academic-stress', 'Academic Stress'),
        ('relationships', 'Relationships'),
        ('anxiety', 'Anxiety'),
        ('depression', 'Depression'),
        ('self-care', 'Self Care'),
        ('motivation', 'Motivation'),
        ('crisis-support', 'Crisis Support'),
    ]

    title = models.CharField(max_length=200)
    description = models.CharField(max_length=1000)
    category = models.CharField(max_length=30, choices=CATEGORY_CHOICES)
    is_pinned = models.BooleanField(default=False)
    is_locked = models.BooleanField(default=False)
    views = models.PositiveIntegerField(default=0)
    tags = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category', 'is_moderated'], name='forum_category_mod_idx'),
            models.Index(fields=['is_pinned', '-created_at'], name='forum_pinned_created_idx'),
        ]

    def __str__(self):
        return self.title


class ForumReply(VotableContent):
    post = models.ForeignKey(
        ForumPost,
        on_delete=models.CASCADE,
        related_name='replies'
    )
    content = models.CharField(max_length=2000)
    parent_reply = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children'
    )

    class Meta:
        verbose_name_plural = "Forum replies"
        ordering = ['created_at']

    def __str__(self):
        return f"Reply by {self.author} on {self.post_id}"
