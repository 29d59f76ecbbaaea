import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from authentication.authentication import issue_token
from users.models import Role

User = get_user_model()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=Role.STUDENT, **kwargs):
        counter["n"] += 1
        username = kwargs.pop("username", f"{role}{counter['n']}")
        defaults = {
            "email": f"{username}@test.com",
            "password": "password123",
            "role": role,
            "is_verified": True,
        }
        defaults.update(kwargs)
        return User.objects.create_user(username=username, **defaults)

    return _make_user


@pytest.fixture
def student(make_user):
    return make_user(Role.STUDENT, username="student", first_name="John", last_name="Student")


@pytest.fixture
def other_student(make_user):
    return make_user(Role.STUDENT, username="peer", first_name="Jane", last_name="Peer")


@pytest.fixture
def counsellor(make_user):
    return make_user(Role.COUNSELLOR, username="counsellor", first_name="Sarah", last_name="Counsellor")


@pytest.fixture
def admin_user(make_user):
    return make_user(Role.ADMIN, username="admin", first_name="Admin", last_name="User")


@pytest.fixture
def client_for():
    """Return an ``APIClient`` sending a bearer token for ``user``."""

    def _client_for(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return client

    return _client_for
