import pytest

from messaging.models import Chat, ChatParticipant, Message

pytestmark = pytest.mark.django_db


@pytest.fixture
def chat(student, counsellor):
    return Chat.start("student-counsellor", [student, counsellor])


def send(client, chat, content="Hello"):
    return client.post(f"/api/chat/{chat.id}/messages/", {"content": content}, format="json")


def test_create_chat_requires_target(client_for, student):
    response = client_for(student).post("/api/chat/", {}, format="json")

    assert response.status_code == 400
    assert response.data["error"] == "Participant ID or counsellor ID is required"


def test_create_chat_unknown_target(client_for, student):
    response = client_for(student).post("/api/chat/", {"counsellor_id": 9999}, format="json")

    assert response.status_code == 404


def test_create_chat_with_self_is_rejected(client_for, student):
    response = client_for(student).post("/api/chat/", {"participant_id": student.id}, format="json")

    assert response.status_code == 400


def test_create_chat_is_idempotent_per_pair_and_type(client_for, student, counsellor):
    client = client_for(student)

    created = client.post("/api/chat/", {"counsellor_id": counsellor.id}, format="json")
    again = client.post("/api/chat/", {"counsellor_id": counsellor.id}, format="json")
    peer = client.post(
        "/api/chat/", {"participant_id": counsellor.id, "chat_type": "student-peer"}, format="json"
    )

    assert created.status_code == 201
    assert again.status_code == 200
    assert again.data["message"] == "Chat already exists"
    assert again.data["chat"]["id"] == created.data["chat"]["id"]
    assert peer.status_code == 201
    assert Chat.objects.count() == 2


def test_sending_updates_last_message_and_unread_counters(client_for, chat, student, counsellor):
    response = send(client_for(student), chat, "I need to talk")

    assert response.status_code == 201
    chat.refresh_from_db()
    assert chat.last_message_id == response.data["data"]["id"]
    assert ChatParticipant.objects.get(chat=chat, user=counsellor).unread_count == 1
    assert ChatParticipant.objects.get(chat=chat, user=student).unread_count == 0


def test_non_participant_cannot_read_or_send(client_for, chat, other_student):
    client = client_for(other_student)

    assert client.get(f"/api/chat/{chat.id}/").status_code == 403
    assert send(client, chat).status_code == 403


def test_fetching_chat_marks_other_messages_read(client_for, chat, student, counsellor):
    send(client_for(student), chat, "hi")
    send(client_for(counsellor), chat, "hello, how are you?")
    counsellor_client = client_for(counsellor)

    assert counsellor_client.get("/api/chat/unread/count/").data == {"unread_count": 1}
    response = counsellor_client.get(f"/api/chat/{chat.id}/")

    assert [m["content"] for m in response.data["messages"]] == ["hi", "hello, how are you?"]
    assert response.data["chat"]["unread_count"] == 0
    assert counsellor_client.get("/api/chat/unread/count/").data == {"unread_count": 0}
    student_message = Message.objects.get(content="hi")
    assert student_message.is_read is True
    assert student_message.read_receipts.filter(user=counsellor).exists()
    assert Message.objects.get(content="hello, how are you?").is_read is False


def test_list_shows_caller_unread_counter(client_for, chat, student, counsellor):
    send(client_for(student), chat)
    send(client_for(student), chat)

    response = client_for(counsellor).get("/api/chat/")

    assert response.data["chats"][0]["id"] == chat.id
    assert response.data["chats"][0]["unread_count"] == 2


def test_mark_read_resets_counter(client_for, chat, student, counsellor):
    send(client_for(student), chat)

    response = client_for(counsellor).post(f"/api/chat/{chat.id}/read/")

    assert response.data == {"message": "Chat marked as read"}
    assert ChatParticipant.objects.get(chat=chat, user=counsellor).unread_count == 0


def test_edit_and_soft_delete_are_sender_only(client_for, chat, student, counsellor):
    message_id = send(client_for(student), chat, "typo").data["data"]["id"]

    denied = client_for(counsellor).put(f"/api/chat/messages/{message_id}/", {"content": "x"}, format="json")
    edited = client_for(student).put(f"/api/chat/messages/{message_id}/", {"content": "fixed"}, format="json")
    deleted = client_for(student).delete(f"/api/chat/messages/{message_id}/")

    assert denied.status_code == 403
    assert edited.data["data"]["is_edited"] is True
    assert edited.data["data"]["edited_at"] is not None
    assert deleted.status_code == 200
    assert Message.objects.get(pk=message_id).is_deleted is True
    assert client_for(student).get(f"/api/chat/{chat.id}/").data["messages"] == []


def test_available_counsellors(client_for, student, counsellor, make_user):
    make_user("counsellor", username="unverified", is_verified=False)

    response = client_for(student).get("/api/chat/counsellors/available/")

    assert [c["username"] for c in response.data["counsellors"]] == ["counsellor"]
    assert response.data["counsellors"][0]["profile"]["first_name"] == "Sarah"
