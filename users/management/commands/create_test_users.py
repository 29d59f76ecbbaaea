from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction
from users.models import Role
from users.serializers import apply_profile
import logging

logger = logging.getLogger(__name__)
User = get_user_model()

TEST_USERS = [
    {
        "username": "student1",
        "email": "student1@test.com",
        "role": Role.STUDENT,
        "profile": {
            "first_name": "John",
            "last_name": "Student",
            "bio": "Engineering student",
        },
    },
    {
        "username": "counsellor1",
        "email": "counsellor1@test.com",
        "role": Role.COUNSELLOR,
        "profile": {
            "first_name": "Dr. Sarah",
            "last_name": "Counsellor",
            "bio": "Licensed mental health counsellor",
            "specialization": "Anxiety and Stress Management",
        },
    },
    {
        "username": "counsellor2",
        "email": "counsellor2@test.com",
        "role": Role.COUNSELLOR,
        "profile": {
            "first_name": "Dr. Michael",
            "last_name": "Therapist",
            "bio": "Clinical psychologist",
            "specialization": "Depression and Academic Stress",
        },
    },
    {
        "username": "admin1",
        "email": "admin1@test.com",
        "role": Role.ADMIN,
        "profile": {
            "first_name": "Admin",
            "last_name": "User",
            "bio": "Platform administrator",
        },
    },
]


class Command(BaseCommand):
    help = "Create one student, two counsellors and one admin for local testing"

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default="password123",
            help="Password given to every created account (default: password123)",
        )

    def handle(self, *args, **kwargs):
        password = kwargs["password"]
        created = 0

        for data in TEST_USERS:
            if User.objects.filter(email__iexact=data["email"]).exists():
                self.stdout.write(f"User {data['email']} already exists, skipping...")
                continue

            with transaction.atomic():
                user = User.objects.create_user(
                    username=data["username"],
                    email=data["email"],
                    password=password,
                    role=data["role"],
                    is_active=True,
                    is_verified=True,
                )
                apply_profile(user, data["profile"])

            created += 1
            logger.info(f"Seeded {user.role} account {user.email}")
            self.stdout.write(
                self.style.SUCCESS(f"Created user: {user.email} ({user.role})")
            )

        self.stdout.write(self.style.SUCCESS(f"Created {created} test users"))
        self.stdout.write("\nTest Accounts:")
        for data in TEST_USERS:
            self.stdout.write(f"{data['role'].label}: {data['email']} / {password}")
