import pytest

from forum.models import ForumPost
from journal.models import JournalEntry
from mood.models import MoodEntry
from resources.models import Resource

pytestmark = pytest.mark.django_db


def flagged_entry(author, **kwargs):
    return JournalEntry.objects.create(
        author=author, content="flagged words", mood="sad", is_flagged=True, flag_reason="spam", **kwargs
    )


def flagged_post(author, **kwargs):
    return ForumPost.objects.create(
        author=author,
        title="Flagged post",
        description="Something off",
        category="general",
        is_flagged=True,
        flag_reason="harassment",
        **kwargs,
    )


def test_console_requires_admin(api_client, client_for, student, counsellor):
    assert api_client.get("/api/admin/dashboard/").status_code == 401
    assert client_for(student).get("/api/admin/dashboard/").status_code == 403
    assert client_for(counsellor).get("/api/admin/moderation/flagged/").status_code == 403


def test_dashboard_summarises_platform(client_for, admin_user, student, counsellor):
    resource = Resource.objects.create(
        author=counsellor, title="Sleep", description="Sleep hygiene", content="...", category="self-care", views=4
    )
    resource.likes.add(student)
    flagged_entry(student)
    flagged_post(student)

    response = client_for(admin_user).get("/api/admin/dashboard/")

    assert response.status_code == 200
    roles = {row["role"]: row for row in response.data["user_stats"]}
    assert roles["student"]["count"] == 1
    assert roles["counsellor"]["verified_count"] == 1
    assert response.data["resource_stats"] == [
        {"category": "self-care", "count": 1, "total_views": 4, "total_likes": 1}
    ]
    assert response.data["flagged_content"] == {"journals": 1, "forums": 1}
    assert len(response.data["recent_users"]) == 3
    assert "password" not in response.data["recent_users"][0]
    assert response.data["recent_resources"][0]["title"] == "Sleep"


def test_flagged_queue_combines_types(client_for, admin_user, student):
    flagged_entry(student)
    flagged_post(student)
    JournalEntry.objects.create(author=student, content="fine", mood="calm")

    response = client_for(admin_user).get("/api/admin/moderation/flagged/")

    assert response.status_code == 200
    assert response.data["total"] == 2
    assert {item["type"] for item in response.data["items"]} == {"journal", "forum"}
    assert response.data["items"][0]["author"]["email"] == "student@test.com"


def test_flagged_queue_filters_by_type(client_for, admin_user, student):
    flagged_entry(student)
    flagged_post(student)

    response = client_for(admin_user).get("/api/admin/moderation/flagged/", {"type": "forum"})

    assert [item["type"] for item in response.data["items"]] == ["forum"]


def test_approve_clears_flag(client_for, admin_user, student):
    entry = flagged_entry(student)

    response = client_for(admin_user).put(
        f"/api/admin/moderation/journal/{entry.id}/", {"action": "approve"}, format="json"
    )

    assert response.status_code == 200
    assert response.data["message"] == "Content approved successfully"
    entry.refresh_from_db()
    assert entry.is_flagged is False
    assert entry.flag_reason is None
    assert entry.is_moderated is True


def test_reject_hides_post_from_listing(client_for, admin_user, student):
    post = flagged_post(student)

    response = client_for(admin_user).put(
        f"/api/admin/moderation/forum/{post.id}/", {"action": "reject"}, format="json"
    )

    assert response.data["message"] == "Content rejected successfully"
    post.refresh_from_db()
    assert post.is_flagged is True
    assert post.is_moderated is True
    listing = client_for(student).get("/api/forum/")
    assert listing.data["total"] == 0


def test_delete_removes_content(client_for, admin_user, student):
    entry = flagged_entry(student)

    response = client_for(admin_user).put(
        f"/api/admin/moderation/journal/{entry.id}/", {"action": "delete"}, format="json"
    )

    assert response.data == {"message": "Content deleted successfully"}
    assert client_for(student).get(f"/api/journal/{entry.id}/").status_code == 404


def test_moderation_rejects_bad_input(client_for, admin_user, student):
    entry = flagged_entry(student)
    client = client_for(admin_user)

    bad_type = client.put(f"/api/admin/moderation/chat/{entry.id}/", {"action": "approve"}, format="json")
    bad_action = client.put(f"/api/admin/moderation/journal/{entry.id}/", {"action": "ban"}, format="json")
    missing = client.put("/api/admin/moderation/journal/999999/", {"action": "approve"}, format="json")

    assert bad_type.status_code == 400
    assert bad_type.data["error"] == "Invalid content type"
    assert bad_action.status_code == 400
    assert bad_action.data["error"] == "Invalid action"
    assert missing.status_code == 404
    assert missing.data["error"] == "Content not found"


def test_user_management(client_for, admin_user, student, counsellor):
    client = client_for(admin_user)

    listing = client.get("/api/admin/users/", {"role": "counsellor"})
    update = client.put(f"/api/admin/users/{student.id}/", {"is_active": False}, format="json")

    assert [user["username"] for user in listing.data["items"]] == ["counsellor"]
    assert update.status_code == 200
    assert update.data["user"]["is_active"] is False


def test_resource_management_sees_drafts(client_for, admin_user, counsellor):
    draft = Resource.objects.create(
        author=counsellor, title="Draft", description="d", content="c", category="stress-management", is_published=False
    )
    client = client_for(admin_user)

    listing = client.get("/api/admin/resources/", {"is_published": "false"})
    update = client.put(
        f"/api/admin/resources/{draft.id}/", {"is_published": True, "is_featured": True}, format="json"
    )

    assert [item["title"] for item in listing.data["items"]] == ["Draft"]
    assert update.data["message"] == "Resource updated successfully"
    draft.refresh_from_db()
    assert draft.is_published and draft.is_featured


def test_analytics_defaults_to_month(client_for, admin_user, student):
    MoodEntry.objects.create(user=student, mood="happy", intensity=6)

    response = client_for(admin_user).get("/api/admin/analytics/")

    assert response.status_code == 200
    assert response.data["period"] == "month"
    assert response.data["mood_trends"][0]["mood"] == "happy"
    assert response.data["mood_trends"][0]["count"] == 1
    assert sum(row["count"] for row in response.data["user_trends"]) == 2


def test_database_dump_omits_passwords(client_for, admin_user, student):
    response = client_for(admin_user).get("/api/admin/database/")

    assert response.status_code == 200
    assert response.data["success"] is True
    assert "users_user" in response.data["collections"]
    rows = response.data["data"]["users_user"]
    assert {row["username"] for row in rows} == {"admin", "student"}
    assert all("password" not in row for row in rows)
