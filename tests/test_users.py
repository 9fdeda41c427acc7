from conftest import bearer, register


def test_update_username(client, registered):
    res = client.put(
        "/api/users/update",
        headers=bearer(registered["token"]),
        json={"username": "updatedUser"},
    )
    assert res.status_code == 200
    body = res.get_json()
    assert body["message"] == "Profile updated successfully"
    assert body["data"]["username"] == "updatedUser"
    assert body["data"]["email"] == "gil@salton.com"


def test_update_email_is_normalized(client, registered):
    res = client.put(
        "/api/users/update",
        headers=bearer(registered["token"]),
        json={"email": "New@Example.com"},
    )
    assert res.status_code == 200
    assert res.get_json()["data"]["email"] == "new@example.com"


def test_update_to_taken_username(client, registered):
    register(client, username="taken", email="taken@example.com")
    res = client.put(
        "/api/users/update",
        headers=bearer(registered["token"]),
        json={"username": "taken"},
    )
    assert res.status_code == 409


def test_update_with_invalid_email(client, registered):
    res = client.put(
        "/api/users/update",
        headers=bearer(registered["token"]),
        json={"email": "not-an-email"},
    )
    assert res.status_code == 422


def test_update_without_token(client, registered):
    res = client.put("/api/users/update", json={"username": "shouldNotUpdate"})
    assert res.status_code == 401


def test_update_with_invalid_token(client, registered):
    res = client.put(
        "/api/users/update",
        headers=bearer("invalidtoken"),
        json={"username": "shouldNotUpdate"},
    )
    assert res.status_code == 401
