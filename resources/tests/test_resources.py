import pytest

from resources.models import Resource

pytestmark = pytest.mark.django_db


def make_resource(author, **kwargs):
    defaults = {
        "title": "Breathing for exam season",
        "description": "Short breathing routine",
        "content": "Inhale for four, hold for four, exhale for four.",
        "category": "stress-management",
        "resource_type": "guide",
        "is_published": True,
    }
    defaults.update(kwargs)
    return Resource.objects.create(author=author, **defaults)


def test_list_only_shows_published(api_client, counsellor):
    make_resource(counsellor, title="Visible")
    make_resource(counsellor, title="Draft", is_published=False)

    response = api_client.get("/api/resources/")

    assert response.status_code == 200
    assert [item["title"] for item in response.data["items"]] == ["Visible"]
    assert response.data["total"] == 1
    assert response.data["current_page"] == 1


def test_list_filters_and_search(api_client, counsellor):
    make_resource(counsellor, title="Calm mind", category="mindfulness", tags=["sleep"])
    make_resource(counsellor, title="Exam stress", category="academic-pressure")

    by_category = api_client.get("/api/resources/", {"category": "mindfulness"})
    by_tag = api_client.get("/api/resources/", {"search": "SLEEP"})

    assert [item["title"] for item in by_category.data["items"]] == ["Calm mind"]
    assert [item["title"] for item in by_tag.data["items"]] == ["Calm mind"]


def test_default_page_size_is_ten(api_client, counsellor):
    for index in range(12):
        make_resource(counsellor, title=f"Resource {index}")

    response = api_client.get("/api/resources/")

    assert len(response.data["items"]) == 10
    assert response.data["total_pages"] == 2


def test_unpublished_resource_is_hidden_from_non_admins(api_client, client_for, counsellor, admin_user):
    draft = make_resource(counsellor, is_published=False)

    assert api_client.get(f"/api/resources/{draft.id}/").status_code == 404
    assert client_for(counsellor).get(f"/api/resources/{draft.id}/").status_code == 404
    assert client_for(admin_user).get(f"/api/resources/{draft.id}/").status_code == 200


def test_detail_increments_views_every_fetch(api_client, counsellor):
    resource = make_resource(counsellor)

    api_client.get(f"/api/resources/{resource.id}/")
    response = api_client.get(f"/api/resources/{resource.id}/")

    assert response.data["resource"]["views"] == 2
    resource.refresh_from_db()
    assert resource.views == 2


def test_students_cannot_create(client_for, student):
    response = client_for(student).post(
        "/api/resources/",
        {"title": "x", "description": "x", "content": "x", "category": "anxiety", "resource_type": "article"},
        format="json",
    )

    assert response.status_code == 403
    assert response.data["error"] == "Insufficient permissions."


def test_counsellor_creates_resource(client_for, counsellor):
    response = client_for(counsellor).post(
        "/api/resources/",
        {
            "title": "Grounding",
            "description": "5-4-3-2-1",
            "content": "Name five things you can see.",
            "category": "anxiety",
            "resource_type": "worksheet",
            "tags": [" grounding ", ""],
        },
        format="json",
    )

    assert response.status_code == 201
    assert response.data["resource"]["author"]["username"] == "counsellor"
    assert response.data["resource"]["tags"] == ["grounding"]
    assert response.data["resource"]["reading_time"] == 5


def test_only_author_or_admin_can_update(client_for, counsellor, make_user, admin_user):
    resource = make_resource(counsellor)
    other = make_user("counsellor", username="other_counsellor")

    denied = client_for(other).put(f"/api/resources/{resource.id}/", {"title": "Mine"}, format="json")
    allowed = client_for(admin_user).put(f"/api/resources/{resource.id}/", {"title": "Edited"}, format="json")

    assert denied.status_code == 403
    assert allowed.status_code == 200
    assert allowed.data["resource"]["title"] == "Edited"


def test_only_admin_can_delete(client_for, counsellor, admin_user):
    resource = make_resource(counsellor)

    assert client_for(counsellor).delete(f"/api/resources/{resource.id}/").status_code == 403
    assert client_for(admin_user).delete(f"/api/resources/{resource.id}/").status_code == 200
    assert not Resource.objects.filter(pk=resource.id).exists()


def test_like_toggles(client_for, counsellor, student):
    resource = make_resource(counsellor)
    client = client_for(student)

    first = client.post(f"/api/resources/{resource.id}/like/")
    second = client.post(f"/api/resources/{resource.id}/like/")

    assert first.data == {"message": "Resource liked", "likes": 1}
    assert second.data == {"message": "Resource unliked", "likes": 0}


def test_like_requires_token(api_client, counsellor):
    resource = make_resource(counsellor)

    response = api_client.post(f"/api/resources/{resource.id}/like/")

    assert response.status_code == 401
    assert response.data["error"] == "Access denied. No token provided."


def test_featured_and_categories(api_client, counsellor):
    for index in range(7):
        make_resource(counsellor, title=f"Featured {index}", is_featured=True)
    make_resource(counsellor, category="depression")

    featured = api_client.get("/api/resources/featured/")
    categories = api_client.get("/api/resources/categories/list/")

    assert len(featured.data["resources"]) == 6
    assert categories.data["categories"] == ["depression", "stress-management"]


@pytest.mark.parametrize("limit", ["abc", "0", "-3"])
def test_invalid_limit_keeps_the_listing_page_size(api_client, counsellor, limit):
    for index in range(12):
        make_resource(counsellor, title=f"Guide {index}")

    response = api_client.get("/api/resources/", {"limit": limit})

    assert response.status_code == 200
    assert len(response.data["items"]) == 10
    assert response.data["total_pages"] == 2
