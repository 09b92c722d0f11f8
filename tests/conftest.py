import pytest
from messagely import create_app, db
from messagely.config import TestConfig


USERS = {
    "alice": {"username": "alice", "password": "pw", "first_name": "Alice", "last_name": "Adams", "phone": "+15550001"},
    "bob": {"username": "bob", "password": "secret", "first_name": "Bob", "last_name": "Brown", "phone": "+15550002"},
    "carol": {"username": "carol", "password": "hunter2", "first_name": "Carol", "last_name": "Clark", "phone": "+15550003"},
}


@pytest.fixture(scope="function")
def app():
    """Create an app backed by a fresh in-memory database for each test."""
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture(scope="function")
def tokens(client):
    """Register alice, bob and carol and return their tokens by username."""
    result = {}
    for username, data in USERS.items():
        response = client.post("/register", json=data)
        assert response.status_code == 201
        result[username] = response.get_json()["token"]
    return result


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def send(client, token, to_username, body):
    response = client.post("/messages", json={"to_username": to_username, "body": body},
                           headers=auth_header(token))
    assert response.status_code == 201
    return response.get_json()["newMessage"]
