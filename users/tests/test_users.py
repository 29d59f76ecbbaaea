import pytest
from django.core.management import call_command
from django.contrib.auth import get_user_model

from users.models import Role

pytestmark = pytest.mark.django_db

User = get_user_model()


def test_listing_users_is_admin_only(client_for, student, admin_user):
    assert client_for(student).get("/api/users/").status_code == 403

    response = client_for(admin_user).get("/api/users/")

    assert response.status_code == 200
    assert response.data["total"] == 2
    assert response.data["current_page"] == 1


def test_list_filters_by_role_and_active(client_for, admin_user, student, make_user):
    make_user(Role.STUDENT, username="inactive", is_active=False)

    response = client_for(admin_user).get("/api/users/", {"role": "student", "is_active": "false"})

    assert [user["username"] for user in response.data["items"]] == ["inactive"]


def test_counsellors_listing_is_public(api_client, counsellor, make_user):
    make_user(Role.COUNSELLOR, username="unverified", is_verified=False)
    make_user(Role.COUNSELLOR, username="retired", is_active=False)

    response = api_client.get("/api/users/counsellors/")

    assert response.status_code == 200
    assert [user["username"] for user in response.data["counsellors"]] == ["counsellor"]
    assert "email" not in response.data["counsellors"][0]


def test_retrieve_shows_limited_profile_to_peers(client_for, student, other_student, admin_user):
    own = client_for(student).get(f"/api/users/{student.id}/")
    peer = client_for(other_student).get(f"/api/users/{student.id}/")
    admin = client_for(admin_user).get(f"/api/users/{student.id}/")

    assert own.data["user"]["email"] == "student@test.com"
    assert "email" not in peer.data["user"]
    assert peer.data["user"]["profile"]["first_name"] == "John"
    assert admin.data["user"]["email"] == "student@test.com"


def test_retrieve_unknown_user(client_for, student):
    response = client_for(student).get("/api/users/999999/")

    assert response.status_code == 404
    assert response.data["error"] == "User not found"


def test_admin_updates_flags_only(client_for, admin_user, student):
    response = client_for(admin_user).put(
        f"/api/users/{student.id}/",
        {"is_verified": False, "role": "counsellor", "username": "renamed"},
        format="json",
    )

    assert response.status_code == 200
    student.refresh_from_db()
    assert student.is_verified is False
    assert student.role == Role.COUNSELLOR
    assert student.username == "student"


def test_admin_deletes_user(client_for, admin_user, student):
    response = client_for(admin_user).delete(f"/api/users/{student.id}/")

    assert response.data == {"message": "User deleted successfully"}
    assert not User.objects.filter(pk=student.pk).exists()


def test_stats_overview(client_for, admin_user, student, make_user):
    make_user(Role.STUDENT, username="inactive", is_active=False)

    response = client_for(admin_user).get("/api/users/stats/overview/")

    assert response.data["total_users"] == 3
    assert response.data["active_users"] == 2
    students = next(row for row in response.data["role_stats"] if row["role"] == "student")
    assert students == {"role": "student", "count": 2, "active": 1, "verified": 2}


def test_profile_and_preferences_created_with_user(make_user):
    user = make_user()

    assert user.profile.bio == ""
    assert user.preferences.notification_preferences == {"email": True, "chat": True}


def test_create_test_users_is_idempotent():
    call_command("create_test_users")
    call_command("create_test_users")

    assert User.objects.count() == 4
    counsellor = User.objects.get(email="counsellor1@test.com")
    assert counsellor.is_verified
    assert counsellor.profile.specialization == "Anxiety and Stress Management"
    assert counsellor.check_password("password123")
