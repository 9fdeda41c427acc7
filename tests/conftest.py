import pytest

from api import create_app


@pytest.fixture()
def app():
    app = create_app("testing")
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def token_service(app):
    return app.extensions["token_service"]


def register(client, username="gili", email="gil@salton.com", password="password123"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


def login(client, email="gil@salton.com", password="password123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def registered(client):
    """A registered user; returns the register response body."""
    res = register(client)
    assert res.status_code == 201
    return res.get_json()
