from datetime import datetime, timedelta, timezone

import pytest

from models import storage
from models.notification import Notification, NotificationType

from conftest import bearer, register


@pytest.fixture()
def users(client):
    alice = register(client, username="alice", email="alice@example.com").get_json()
    bob = register(client, username="bob", email="bob@example.com").get_json()
    return alice, bob


@pytest.fixture()
def notifications(app, users):
    alice, bob = users
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    with app.app_context():
        storage.new(Notification(recipient_id=alice["data"]["id"], sender_id=bob["data"]["id"],
                                 event_id="event-1", type=NotificationType.JOIN, created_at=base))
        storage.new(Notification(recipient_id=alice["data"]["id"], sender_id=bob["data"]["id"],
                                 event_id="event-2", type=NotificationType.LIKE,
                                 created_at=base + timedelta(hours=1)))
        storage.new(Notification(recipient_id=bob["data"]["id"], sender_id=alice["data"]["id"],
                                 event_id="event-3", type=NotificationType.LIKE, created_at=base))
        storage.save()
    return users


def test_lists_only_own_notifications_newest_first(client, notifications):
    alice, bob = notifications
    res = client.get("/api/notifications", headers=bearer(alice["token"]))
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert [n["event_id"] for n in data] == ["event-2", "event-1"]
    assert [n["type"] for n in data] == ["like", "join"]
    assert data[0]["sender"] == {"id": bob["data"]["id"], "username": "bob"}
    assert all(n["is_read"] is False for n in data)


def test_mark_as_read(client, notifications):
    alice, bob = notifications
    res = client.put("/api/notifications/read", headers=bearer(alice["token"]))
    assert res.status_code == 200
    assert res.get_json() == {"message": "Notifications marked as read", "updated": 2}

    data = client.get("/api/notifications", headers=bearer(alice["token"])).get_json()["data"]
    assert all(n["is_read"] for n in data)
    # bob's notification is untouched
    data = client.get("/api/notifications", headers=bearer(bob["token"])).get_json()["data"]
    assert [n["is_read"] for n in data] == [False]


def test_empty_list(client, users):
    alice, _ = users
    res = client.get("/api/notifications", headers=bearer(alice["token"]))
    assert res.get_json() == {"data": []}


def test_requires_token(client):
    assert client.get("/api/notifications").status_code == 401
    assert client.put("/api/notifications/read").status_code == 401
