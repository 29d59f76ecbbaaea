# resources/models.py
from django.db import models
from django.conf import settings


class Resource(models.Model):
    """Self-help material published by counsellors and admins"""
    CATEGORY_CHOICES = [
        ('stress-management', 'Stress Management'),
        ('anxiety', 'Anxiety'),
        ('depression', 'Depression'),
        ('motivation', 'Motivation'),
        ('mindfulness', 'Mindfulness'),
        ('self-care', 'Self Care'),
        ('academic-pressure', 'Academic Pressure'),
        ('relationships', 'Relationships'),
        ('crisis-support', 'Crisis Support'),
    ]

    TYPE_CHOICES = [
        ('article', 'Article'),
        ('video', 'Video'),
        ('guide', 'Guide'),
        ('worksheet', 'Worksheet'),
        ('meditation', 'Meditation'),
    ]

    DIFFICULTY_CHOICES = [
        ('beginner', 'Beginner'),
        ('intermediate', 'Intermediate'),
        ('advanced', 'Advanced'),
    ]

    title = models.CharField(max_length=200)
    description = models.TextField()
    content = models.TextField()
    category = models.CharField(max_length=30, choices=CATEGORY_CHOICES)
    resource_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    media_url = models.URLField(max_length=500, blank=True, null=True)
    thumbnail = models.URLField(max_length=500, blank=True, null=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='resources'
    )
    tags = models.JSONField(default=list, blank=True)
    is_published = models.BooleanField(default=False)
    is_featured = models.BooleanField(default=False)
    views = models.PositiveIntegerField(default=0)
    likes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='liked_resources',
        blank=True
    )
    reading_time = models.PositiveIntegerField(default=5, help_text="Minutes")
    difficulty = models.CharField(
        max_length=20,
        choices=DIFFICULTY_CHOICES,
        default='beginner'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category', 'is_published'], name='resource_category_pub_idx'),
        ]

    def __str__(self):
        return self.title

    def toggle_like(self, user):
        """Add or remove ``user`` from the likes; returns True when now liked."""
        if self.likes.filter(pk=user.pk).exists():
            self.likes.remove(user)
            return False
        self.likes.add(user)
        return True
