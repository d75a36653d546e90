from types import SimpleNamespace

import pytest

from api.chat_service import ChatService, configure_chat_service
from tests.fakes import FakeFirestore, FakeIdentity, FakePush


@pytest.fixture
def backend():
    """A ChatService wired to in-memory fakes and installed for the views."""
    db = FakeFirestore()
    identity = FakeIdentity()
    push = FakePush()
    service = ChatService(identity=identity, db=db, push=push)
    configure_chat_service(service)
    yield SimpleNamespace(service=service, db=db, identity=identity, push=push)
    configure_chat_service(None)


@pytest.fixture
def post_json(client):
    def _post(path, payload):
        return client.post(path, data=payload, content_type="application/json")
    return _post


@pytest.fixture
def add_user(backend):
    """Insert a users/{uid} document directly, bypassing registration."""
    def _add(uid, **fields):
        data = {
            "email": f"{uid}@example.com",
            "password": "",
            "status": "offline",
            "notifications": 0,
            "createdAt": "2024-05-01T10:00:00.000Z",
        }
        data.update(fields)
        backend.db.collection("users").document(uid).set(data)
        return data
    return _add
