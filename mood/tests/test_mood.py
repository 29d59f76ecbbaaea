from datetime import timedelta

import pytest
from django.utils import timezone

from mood.models import MoodEntry

pytestmark = pytest.mark.django_db


def backdate(entry, days):
    MoodEntry.objects.filter(pk=entry.pk).update(created_at=timezone.now() - timedelta(days=days))


def test_create_uses_defaults(client_for, student):
    response = client_for(student).post("/api/mood/", {"mood": "happy"}, format="json")

    assert response.status_code == 201
    assert response.data["entry"]["intensity"] == 5
    assert response.data["entry"]["is_private"] is True


def test_second_entry_same_day_conflicts_with_original(client_for, student):
    client = client_for(student)

    first = client.post("/api/mood/", {"mood": "happy", "intensity": 7}, format="json")
    second = client.post("/api/mood/", {"mood": "sad", "intensity": 2}, format="json")

    assert second.status_code == 400
    assert second.data["error"] == "Mood entry already exists for today"
    assert second.data["entry"]["id"] == first.data["entry"]["id"]
    assert MoodEntry.objects.count() == 1


def test_entry_from_yesterday_does_not_conflict(client_for, student):
    entry = MoodEntry.objects.create(user=student, mood="calm")
    backdate(entry, 1)

    response = client_for(student).post("/api/mood/", {"mood": "calm"}, format="json")

    assert response.status_code == 201


@pytest.mark.parametrize(
    "payload",
    [
        {"mood": "bored"},
        {"mood": "happy", "intensity": 11},
        {"mood": "happy", "sleep_hours": 25},
        {"mood": "happy", "activities": ["skydiving"]},
    ],
)
def test_create_validates_ranges_and_enums(client_for, student, payload):
    response = client_for(student).post("/api/mood/", payload, format="json")

    assert response.status_code == 400


def test_today_returns_entry_or_null(client_for, student):
    client = client_for(student)

    assert client.get("/api/mood/today/").data == {"entry": None}
    client.post("/api/mood/", {"mood": "excited"}, format="json")
    assert client.get("/api/mood/today/").data["entry"]["mood"] == "excited"


def test_list_is_own_entries_with_mood_filter(client_for, student, other_student):
    MoodEntry.objects.create(user=student, mood="happy")
    MoodEntry.objects.create(user=student, mood="sad")
    MoodEntry.objects.create(user=other_student, mood="happy")

    response = client_for(student).get("/api/mood/", {"mood": "happy"})

    assert response.data["total"] == 1
    assert response.data["items"][0]["user"] == student.id


def test_list_date_range_is_inclusive(client_for, student):
    old = MoodEntry.objects.create(user=student, mood="sad")
    backdate(old, 10)
    MoodEntry.objects.create(user=student, mood="happy")
    today = timezone.localdate()

    response = client_for(student).get(
        "/api/mood/", {"start_date": (today - timedelta(days=2)).isoformat(), "end_date": today.isoformat()}
    )

    assert [item["mood"] for item in response.data["items"]] == ["happy"]


def test_only_owner_can_edit_or_delete(client_for, student, other_student):
    entry = MoodEntry.objects.create(user=student, mood="sad")

    assert client_for(other_student).put(f"/api/mood/{entry.id}/", {"mood": "happy"}, format="json").status_code == 403
    assert client_for(other_student).delete(f"/api/mood/{entry.id}/").status_code == 403
    updated = client_for(student).put(f"/api/mood/{entry.id}/", {"mood": "happy"}, format="json")
    assert updated.data["entry"]["mood"] == "happy"
    assert client_for(student).delete(f"/api/mood/{entry.id}/").status_code == 200
    assert client_for(student).delete(f"/api/mood/{entry.id}/").status_code == 404


def test_overview_statistics(client_for, student):
    MoodEntry.objects.create(user=student, mood="happy", intensity=8, stress_level=2)
    MoodEntry.objects.create(user=student, mood="happy", intensity=6, stress_level=4)
    MoodEntry.objects.create(user=student, mood="anxious", intensity=3)
    old = MoodEntry.objects.create(user=student, mood="sad")
    backdate(old, 40)

    response = client_for(student).get("/api/mood/stats/overview/")

    assert response.data["total_entries"] == 3
    happy = response.data["stats"][0]
    assert happy["mood"] == "happy"
    assert happy["count"] == 2
    assert happy["avg_intensity"] == pytest.approx(7)
    assert happy["avg_stress_level"] == pytest.approx(3)
    assert len(response.data["intensity_trend"]) == 1


def test_trends_group_by_day_and_mood(client_for, student):
    MoodEntry.objects.create(user=student, mood="calm", intensity=4)
    old = MoodEntry.objects.create(user=student, mood="sad", intensity=2)
    backdate(old, 20)

    week = client_for(student).get("/api/mood/stats/trends/", {"period": "week"})
    month = client_for(student).get("/api/mood/stats/trends/", {"period": "month"})

    assert [(t["mood"], t["count"]) for t in week.data["trends"]] == [("calm", 1)]
    assert [t["mood"] for t in month.data["trends"]] == ["sad", "calm"]


def test_activity_statistics(client_for, student):
    MoodEntry.objects.create(user=student, mood="happy", intensity=8, activities=["exercise", "hobby"])
    MoodEntry.objects.create(user=student, mood="calm", intensity=4, activities=["exercise"])

    response = client_for(student).get("/api/mood/stats/activities/")

    assert response.data["activity_stats"] == [
        {"activity": "exercise", "count": 2, "avg_mood_intensity": 6.0},
        {"activity": "hobby", "count": 1, "avg_mood_intensity": 8.0},
    ]
