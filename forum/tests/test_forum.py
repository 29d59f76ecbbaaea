import pytest

from forum.models import ForumPost, ForumReply

pytestmark = pytest.mark.django_db


def make_post(author, **kwargs):
    defaults = {
        "title": "Midterms are crushing me",
        "description": "How do you all cope?",
        "category": "academic-stress",
    }
    defaults.update(kwargs)
    return ForumPost.objects.create(author=author, **defaults)


def vote(client, post, vote_type):
    return client.post(f"/api/forum/{post.id}/vote/", {"vote_type": vote_type}, format="json")


def test_list_excludes_moderated_and_hides_anonymous_author(api_client, student):
    make_post(student, title="Visible")
    make_post(student, title="Removed", is_moderated=True)

    response = api_client.get("/api/forum/")

    assert [item["title"] for item in response.data["items"]] == ["Visible"]
    assert response.data["items"][0]["author"] is None


def test_author_sees_own_anonymous_post_author(client_for, student):
    make_post(student)

    response = client_for(student).get("/api/forum/")

    assert response.data["items"][0]["author"]["username"] == "student"


def test_list_filters_category_and_search(api_client, student):
    make_post(student, title="Sleep tips", category="self-care")
    make_post(student, title="Exam panic", category="anxiety")

    by_category = api_client.get("/api/forum/", {"category": "anxiety"})
    by_search = api_client.get("/api/forum/", {"search": "sleep"})

    assert [item["title"] for item in by_category.data["items"]] == ["Exam panic"]
    assert [item["title"] for item in by_search.data["items"]] == ["Sleep tips"]


def test_detail_counts_views_and_orders_replies(api_client, student, other_student):
    post = make_post(student)
    first = ForumReply.objects.create(post=post, author=other_student, content="first")
    ForumReply.objects.create(post=post, author=student, content="second", parent_reply=first)

    api_client.get(f"/api/forum/{post.id}/")
    response = api_client.get(f"/api/forum/{post.id}/")

    assert response.data["post"]["views"] == 2
    assert [reply["content"] for reply in response.data["replies"]] == ["first", "second"]
    assert response.data["replies"][1]["parent_reply"] == first.id


def test_missing_post_returns_not_found(api_client):
    response = api_client.get("/api/forum/9999/")

    assert response.status_code == 404
    assert response.data == {"error": "Post not found"}


def test_upvote_twice_restores_original_state(client_for, student, other_student):
    post = make_post(student)
    client = client_for(other_student)

    assert vote(client, post, "upvote").data["upvotes"] == 1
    second = vote(client, post, "upvote")

    assert second.data == {"message": "Vote recorded", "upvotes": 0, "downvotes": 0}


def test_switching_vote_is_exclusive(client_for, student, other_student):
    post = make_post(student)
    client = client_for(other_student)

    vote(client, post, "upvote")
    response = vote(client, post, "downvote")

    assert response.data["upvotes"] == 0
    assert response.data["downvotes"] == 1
    assert not post.upvotes.filter(pk=other_student.pk).exists()
    assert post.downvotes.filter(pk=other_student.pk).exists()


def test_unknown_vote_type_is_rejected(client_for, student):
    post = make_post(student)

    response = vote(client_for(student), post, "sideways")

    assert response.status_code == 400


def test_reply_rules(client_for, student, other_student):
    post = make_post(student)
    other_post = make_post(student)
    client = client_for(other_student)

    top = client.post(f"/api/forum/{post.id}/reply/", {"content": "Hang in there"}, format="json")
    nested = client.post(
        f"/api/forum/{post.id}/reply/", {"content": "+1", "parent_reply": top.data["reply"]["id"]}, format="json"
    )
    too_deep = client.post(
        f"/api/forum/{post.id}/reply/", {"content": "+2", "parent_reply": nested.data["reply"]["id"]}, format="json"
    )
    wrong_post = client.post(
        f"/api/forum/{other_post.id}/reply/", {"content": "?", "parent_reply": top.data["reply"]["id"]}, format="json"
    )

    assert top.status_code == 201
    assert nested.status_code == 201
    assert too_deep.status_code == 400
    assert wrong_post.status_code == 400


def test_reply_to_locked_or_missing_post(client_for, student):
    locked = make_post(student, is_locked=True)
    client = client_for(student)

    assert client.post(f"/api/forum/{locked.id}/reply/", {"content": "hi"}, format="json").status_code == 400
    assert client.post("/api/forum/9999/reply/", {"content": "hi"}, format="json").status_code == 404


def test_update_is_author_only(client_for, student, other_student, admin_user):
    post = make_post(student)

    assert client_for(other_student).put(f"/api/forum/{post.id}/", {"title": "x"}, format="json").status_code == 403
    assert client_for(admin_user).put(f"/api/forum/{post.id}/", {"title": "x"}, format="json").status_code == 403
    response = client_for(student).put(f"/api/forum/{post.id}/", {"title": "Better title"}, format="json")
    assert response.data["post"]["title"] == "Better title"


def test_admin_delete_removes_replies(client_for, student, admin_user):
    post = make_post(student)
    ForumReply.objects.create(post=post, author=student, content="reply")

    assert client_for(admin_user).delete(f"/api/forum/{post.id}/").status_code == 200
    assert not ForumReply.objects.exists()


def test_reply_votes_and_delete(client_for, student, other_student):
    post = make_post(student)
    reply = ForumReply.objects.create(post=post, author=student, content="reply")

    voted = client_for(other_student).post(
        f"/api/forum/replies/{reply.id}/vote/", {"vote_type": "downvote"}, format="json"
    )
    denied = client_for(other_student).delete(f"/api/forum/replies/{reply.id}/")
    deleted = client_for(student).delete(f"/api/forum/replies/{reply.id}/")

    assert voted.data["downvotes"] == 1
    assert denied.status_code == 403
    assert deleted.status_code == 200


def test_pinned_and_categories(api_client, student):
    for index in range(6):
        make_post(student, title=f"Pinned {index}", is_pinned=True)
    make_post(student, category="general")

    pinned = api_client.get("/api/forum/pinned/")
    categories = api_client.get("/api/forum/categories/list/")

    assert len(pinned.data["posts"]) == 5
    assert categories.data["categories"] == ["academic-stress", "general"]


def test_flag_post(client_for, student, other_student):
    post = make_post(student)

    response = client_for(other_student).post(f"/api/forum/{post.id}/flag/", {"reason": "harassment"}, format="json")

    post.refresh_from_db()
    assert response.status_code == 200
    assert post.is_flagged and post.flag_reason == "harassment"
