import pytest
from django.contrib.auth import get_user_model

pytestmark = pytest.mark.django_db

User = get_user_model()


def register(client, **overrides):
    payload = {
        "username": "newstudent",
        "email": "new@test.com",
        "password": "password123",
        "profile": {"first_name": "New", "last_name": "Student"},
    }
    payload.update(overrides)
    return client.post("/api/auth/register/", payload, format="json")


def test_register_creates_student_with_token(api_client):
    response = register(api_client)

    assert response.status_code == 201
    assert response.data["message"] == "User registered successfully"
    assert response.data["token"]
    user = response.data["user"]
    assert user["role"] == "student"
    assert user["profile"]["first_name"] == "New"
    assert user["preferences"]["language"] == "en"
    assert "password" not in user
    assert User.objects.get(email="new@test.com").check_password("password123")


def test_register_rejects_duplicate_email_or_username(api_client, student):
    by_email = register(api_client, email="STUDENT@test.com")
    by_username = register(api_client, username="student", email="other@test.com")

    assert by_email.status_code == 400
    assert by_email.data["error"] == "User with this email or username already exists"
    assert by_username.status_code == 400


def test_register_rejects_short_password(api_client):
    response = register(api_client, password="abc")

    assert response.status_code == 400
    assert "password" in response.data["details"]


def test_login_returns_token_and_stamps_last_login(api_client, student):
    response = api_client.post(
        "/api/auth/login/", {"email": "student@test.com", "password": "password123"}, format="json"
    )

    assert response.status_code == 200
    assert response.data["message"] == "Login successful"
    student.refresh_from_db()
    assert student.last_login is not None

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")
    me = api_client.get("/api/auth/me/")
    assert me.data["user"]["username"] == "student"


def test_login_failures(api_client, make_user):
    make_user(username="gone", is_active=False)

    wrong_password = api_client.post(
        "/api/auth/login/", {"email": "gone@test.com", "password": "nope"}, format="json"
    )
    unknown = api_client.post(
        "/api/auth/login/", {"email": "nobody@test.com", "password": "password123"}, format="json"
    )
    inactive = api_client.post(
        "/api/auth/login/", {"email": "gone@test.com", "password": "password123"}, format="json"
    )

    assert unknown.status_code == 401
    assert unknown.data["error"] == "Invalid email or password"
    assert inactive.status_code == 401
    assert inactive.data["error"] == "Account is deactivated. Please contact support."
    assert wrong_password.status_code == 401


def test_protected_route_token_errors(api_client, client_for, student):
    missing = api_client.get("/api/auth/me/")
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
    invalid = api_client.get("/api/auth/me/")

    assert missing.status_code == 401
    assert missing.data["error"] == "Access denied. No token provided."
    assert invalid.status_code == 401
    assert invalid.data["error"] == "Invalid token."

    client = client_for(student)
    student.is_active = False
    student.save()
    deactivated = client.get("/api/auth/me/")
    assert deactivated.status_code == 401
    assert deactivated.data["error"] == "Account is deactivated."


def test_profile_update_merges_fields(client_for, student):
    response = client_for(student).put(
        "/api/auth/profile/",
        {
            "profile": {"bio": "Second year"},
            "preferences": {"dark_mode": True, "notification_preferences": {"chat": False}},
        },
        format="json",
    )

    assert response.status_code == 200
    user = response.data["user"]
    assert user["profile"]["bio"] == "Second year"
    assert user["profile"]["first_name"] == "John"
    assert user["preferences"]["dark_mode"] is True
    assert user["preferences"]["notification_preferences"] == {"email": True, "chat": False}


def test_change_password(client_for, student):
    client = client_for(student)

    wrong = client.put(
        "/api/auth/change-password/",
        {"current_password": "nope", "new_password": "newpass456"},
        format="json",
    )
    ok = client.put(
        "/api/auth/change-password/",
        {"current_password": "password123", "new_password": "newpass456"},
        format="json",
    )

    assert wrong.status_code == 400
    assert wrong.data["error"] == "Current password is incorrect"
    assert ok.data["message"] == "Password changed successfully"
    student.refresh_from_db()
    assert student.check_password("newpass456")


def test_refresh_and_logout(client_for, student):
    client = client_for(student)

    refreshed = client.post("/api/auth/refresh/")
    logout = client.post("/api/auth/logout/")

    assert refreshed.status_code == 200
    assert refreshed.data["token"]
    assert logout.data == {"message": "Logged out successfully"}


def test_password_endpoints_accept_credentials_end_to_end(api_client):
    registered = register(api_client)
    assert registered.status_code == 201

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {registered.data['token']}")
    changed = api_client.put(
        "/api/auth/change-password/",
        {"current_password": "password123", "new_password": "newpass456"},
        format="json",
    )
    assert changed.status_code == 200

    api_client.credentials()
    old = api_client.post("/api/auth/login/", {"email": "new@test.com", "password": "password123"}, format="json")
    new = api_client.post("/api/auth/login/", {"email": "new@test.com", "password": "newpass456"}, format="json")

    assert old.status_code == 401
    assert new.status_code == 200
    assert new.data["token"]
