import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

FLAG_REASON_CHOICES = [
    ("inappropriate", "Inappropriate"),
    ("spam", "Spam"),
    ("harassment", "Harassment"),
    ("other", "Other"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ForumPost",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("is_anonymous", models.BooleanField(default=True)),
                ("is_flagged", models.BooleanField(default=False)),
                ("flag_reason", models.CharField(blank=True, choices=FLAG_REASON_CHOICES, max_length=20, null=True)),
                ("is_moderated", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=200)),
                ("description", models.CharField(max_length=1000)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("general", "General"),
                            ("academic-stress", "Academic Stress"),
                            ("relationships", "Relationships"),
                            ("anxiety", "Anxiety"),
                            ("depression", "Depression"),
                            ("self-care", "Self Care"),
                            ("motivation", "Motivation"),
                            ("crisis-support", "Crisis Support"),
                        ],
                        max_length=30,
                    ),
                ),
                ("is_pinned", models.BooleanField(default=False)),
                ("is_locked", models.BooleanField(default=False)),
                ("views", models.PositiveIntegerField(default=0)),
                ("tags", models.JSONField(blank=True, default=list)),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="forumpost_set",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "downvotes",
                    models.ManyToManyField(blank=True, related_name="downvoted_forumpost_set", to=settings.AUTH_USER_MODEL),
                ),
                (
                    "upvotes",
                    models.ManyToManyField(blank=True, related_name="upvoted_forumpost_set", to=settings.AUTH_USER_MODEL),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["category", "is_moderated"], name="forum_category_mod_idx"),
                    models.Index(fields=["is_pinned", "-created_at"], name="forum_pinned_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ForumReply",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("is_anonymous", models.BooleanField(default=True)),
                ("is_flagged", models.BooleanField(default=False)),
                ("flag_reason", models.CharField(blank=True, choices=FLAG_REASON_CHOICES, max_length=20, null=True)),
                ("is_moderated", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("content", models.CharField(max_length=2000)),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="forumreply_set",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "downvotes",
                    models.ManyToManyField(blank=True, related_name="downvoted_forumreply_set", to=settings.AUTH_USER_MODEL),
                ),
                (
                    "parent_reply",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="children",
                        to="forum.forumreply",
                    ),
                ),
                (
                    "post",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="replies",
                        to="forum.forumpost",
                    ),
                ),
                (
                    "upvotes",
                    models.ManyToManyField(blank=True, related_name="upvoted_forumreply_set", to=settings.AUTH_USER_MODEL),
                ),
            ],
            options={
                "verbose_name_plural": "Forum replies",
                "ordering": ["created_at"],
            },
        ),
    ]
