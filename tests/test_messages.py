import pytest

from api.push_service import PushResult


def _store(backend, sender, receiver, text, timestamp):
    backend.db.collection("messages").add({
        "senderUid": sender,
        "receiverUid": receiver,
        "message": text,
        "timestamp": timestamp,
    })


def _send(post_json, sender, receiver, text):
    return post_json("/send-message", {"senderUid": sender, "receiverUid": receiver, "message": text})


def test_send_message_without_push_token_increments_counter(backend, post_json, add_user):
    add_user("bob", notifications=2)

    response = _send(post_json, "alice", "bob", "hi bob")

    assert response.status_code == 200
    assert response.json() == {"message": "Message sent successfully!"}
    assert backend.db.collection("users").docs["bob"]["notifications"] == 3
    assert backend.push.sent == []

    stored = list(backend.db.collection("messages").docs.values())
    assert len(stored) == 1
    assert stored[0]["senderUid"] == "alice"
    assert stored[0]["receiverUid"] == "bob"
    assert stored[0]["message"] == "hi bob"
    assert stored[0]["timestamp"].endswith("Z")


def test_send_message_pushes_to_receiver_token(backend, post_json, add_user):
    add_user("bob", fcmToken="device-token-bob")

    response = _send(post_json, "alice", "bob", "are you there?")

    assert response.status_code == 200
    assert backend.push.sent == [
        {"token": "device-token-bob", "title": "New Message", "body": "are you there?"}
    ]
    assert backend.db.collection("users").docs["bob"]["notifications"] == 1


def test_send_message_push_failure_is_not_surfaced(backend, post_json, add_user):
    backend.push.result = PushResult(success=False, error="Token unregistered", error_code="UNREGISTERED")
    add_user("bob", fcmToken="stale-token")

    response = _send(post_json, "alice", "bob", "hello")

    assert response.status_code == 200
    assert backend.db.collection("users").docs["bob"]["notifications"] == 1


def test_send_message_to_unknown_receiver_still_stores_message(backend, post_json):
    response = _send(post_json, "alice", "nobody", "hello?")

    assert response.status_code == 200
    assert len(backend.db.collection("messages").docs) == 1
    assert "nobody" not in backend.db.collection("users").docs


@pytest.mark.parametrize("missing", ["senderUid", "receiverUid", "message"])
def test_send_message_missing_field_returns_400(backend, post_json, missing):
    payload = {"senderUid": "alice", "receiverUid": "bob", "message": "hi"}
    del payload[missing]

    response = post_json("/send-message", payload)

    assert response.status_code == 400
    assert "required" in response.json()["message"]
    assert backend.db.collection("messages").docs == {}


def test_get_messages_returns_pair_sorted_by_timestamp(backend, client):
    _store(backend, "bob", "alice", "second", "2024-05-01T10:00:02.000Z")
    _store(backend, "alice", "bob", "first", "2024-05-01T10:00:01.000Z")
    _store(backend, "alice", "carol", "other chat", "2024-05-01T10:00:00.000Z")
    _store(backend, "bob", "alice", "third", "2024-05-01T10:00:03.000Z")

    response = client.get("/get-messages", {"user1Uid": "alice", "user2Uid": "bob"})

    assert response.status_code == 200
    texts = [m["message"] for m in response.json()["messages"]]
    assert texts == ["first", "second", "third"]


def test_get_messages_includes_same_user_pairs(backend, client):
    _store(backend, "alice", "alice", "note to self", "2024-05-01T09:00:00.000Z")
    _store(backend, "bob", "bob", "bob's note", "2024-05-01T09:30:00.000Z")
    _store(backend, "alice", "bob", "hi", "2024-05-01T10:00:00.000Z")

    response = client.get("/get-messages", {"user1Uid": "alice", "user2Uid": "bob"})

    texts = [m["message"] for m in response.json()["messages"]]
    assert texts == ["note to self", "bob's note", "hi"]


def test_get_messages_after_send(backend, post_json, client, add_user):
    add_user("alice")
    add_user("bob")
    _send(post_json, "alice", "bob", "ping")
    _send(post_json, "bob", "alice", "pong")

    messages = client.get("/get-messages", {"user1Uid": "bob", "user2Uid": "alice"}).json()["messages"]

    assert {m["message"] for m in messages} == {"ping", "pong"}
    assert messages == sorted(messages, key=lambda m: m["timestamp"])


def test_get_messages_missing_param_returns_400(backend, client):
    response = client.get("/get-messages", {"user1Uid": "alice"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required parameters"}


def test_get_messages_empty_conversation(backend, client):
    response = client.get("/get-messages", {"user1Uid": "alice", "user2Uid": "bob"})

    assert response.status_code == 200
    assert response.json() == {"messages": []}
