import pytest

pytestmark = pytest.mark.django_db


def test_unknown_api_route_returns_json_404(api_client):
    response = api_client.get("/api/nothing-here/")

    assert response.status_code == 404
    assert response.json() == {"error": "API route not found"}


def test_page_envelope(client_for, admin_user, make_user):
    for _ in range(4):
        make_user()

    response = client_for(admin_user).get("/api/users/", {"page": 2, "limit": 2})

    assert response.status_code == 200
    assert response.data["total"] == 5
    assert response.data["total_pages"] == 3
    assert response.data["current_page"] == 2
    assert len(response.data["items"]) == 2


def test_page_past_the_end_is_empty(client_for, admin_user):
    response = client_for(admin_user).get("/api/users/", {"page": 9})

    assert response.status_code == 200
    assert response.data["items"] == []
    assert response.data["current_page"] == 9
