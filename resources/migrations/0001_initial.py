import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Resource",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField()),
                ("content", models.TextField()),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("stress-management", "Stress Management"),
                            ("anxiety", "Anxiety"),
                            ("depression", "Depression"),
                            ("motivation", "Motivation"),
                            ("mindfulness", "Mindfulness"),
                            ("self-care", "Self Care"),
                            ("academic-pressure", "Academic Pressure"),
                            ("relationships", "Relationships"),
                            ("crisis-support", "Crisis Support"),
                        ],
                        max_length=30,
                    ),
                ),
                (
                    "resource_type",
                    models.CharField(
                        choices=[
                            ("article", "Article"),
                            ("video", "Video"),
                            ("guide", "Guide"),
                            ("worksheet", "Worksheet"),
                            ("meditation", "Meditation"),
                        ],
                        max_length=20,
                    ),
                ),
                ("media_url", models.URLField(blank=True, max_length=500, null=True)),
                ("thumbnail", models.URLField(blank=True, max_length=500, null=True)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("is_published", models.BooleanField(default=False)),
                ("is_featured", models.BooleanField(default=False)),
                ("views", models.PositiveIntegerField(default=0)),
                ("reading_time", models.PositiveIntegerField(default=5, help_text="Minutes")),
                (
                    "difficulty",
                    models.CharField(
                        choices=[
                            ("beginner", "Beginner"),
                            ("intermediate", "Intermediate"),
                            ("advanced", "Advanced"),
                        ],
                        default="beginner",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="resources",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "likes",
                    models.ManyToManyField(blank=True, related_name="liked_resources", to=settings.AUTH_USER_MODEL),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["category", "is_published"], name="resource_category_pub_idx"),
                ],
            },
        ),
    ]
