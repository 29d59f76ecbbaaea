import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

MOOD_CHOICES = [
    ("very-happy", "Very Happy"),
    ("happy", "Happy"),
    ("neutral", "Neutral"),
    ("sad", "Sad"),
    ("very-sad", "Very Sad"),
    ("anxious", "Anxious"),
    ("stressed", "Stressed"),
    ("excited", "Excited"),
    ("calm", "Calm"),
]

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
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content", models.CharField(max_length=2000)),
                ("mood", models.CharField(choices=MOOD_CHOICES, max_length=20)),
                ("is_anonymous", models.BooleanField(default=True)),
                ("is_public", models.BooleanField(default=True)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("is_flagged", models.BooleanField(default=False)),
                ("flag_reason", models.CharField(blank=True, choices=FLAG_REASON_CHOICES, max_length=20, null=True)),
                ("is_moderated", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="journal_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "Journal Entries",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["author", "-created_at"], name="journal_author_created_idx"),
                    models.Index(fields=["is_public", "is_moderated"], name="journal_public_mod_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalReaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "reaction_type",
                    models.CharField(
                        choices=[
                            ("heart", "Heart"),
                            ("hug", "Hug"),
                            ("support", "Support"),
                            ("understand", "Understand"),
                        ],
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reactions",
                        to="journal.journalentry",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="journal_reactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="JournalComment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content", models.CharField(max_length=500)),
                ("is_anonymous", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="comments",
                        to="journal.journalentry",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="journal_comments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
    ]
