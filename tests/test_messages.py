from tests.conftest import auth_header, send


def test_send_message(client, tokens):
    response = client.post("/messages", json={"to_username": "bob", "body": "hello"},
                           headers=auth_header(tokens["alice"]))
    assert response.status_code == 201
    new_message = response.get_json()["newMessage"]
    assert new_message["from_username"] == "alice"
    assert new_message["to_username"] == "bob"
    assert new_message["body"] == "hello"


def test_send_message_with_matching_from_username(client, tokens):
    response = client.post("/messages",
                           json={"from_username": "alice", "to_username": "bob", "body": "hello"},
                           headers=auth_header(tokens["alice"]))
    assert response.status_code == 201


def test_send_message_as_someone_else(client, tokens):
    response = client.post("/messages",
                           json={"from_username": "carol", "to_username": "bob", "body": "hello"},
                           headers=auth_header(tokens["alice"]))
    assert response.status_code == 401


def test_send_message_requires_login(client, tokens):
    response = client.post("/messages", json={"to_username": "bob", "body": "hello"})
    assert response.status_code == 401


def test_send_message_missing_body(client, tokens):
    response = client.post("/messages", json={"to_username": "bob"},
                           headers=auth_header(tokens["alice"]))
    assert response.status_code == 400


def test_send_message_unknown_recipient(client, tokens):
    response = client.post("/messages", json={"to_username": "ghost", "body": "boo"},
                           headers=auth_header(tokens["alice"]))
    assert response.status_code == 404


def test_message_detail_for_participants(client, tokens):
    msg = send(client, tokens["alice"], "bob", "hello")

    for name in ("alice", "bob"):
        response = client.get(f"/messages/{msg['id']}", headers=auth_header(tokens[name]))
        assert response.status_code == 200
        message = response.get_json()["message"]
        assert message["body"] == "hello"
        assert message["from_user"]["username"] == "alice"
        assert message["to_user"]["username"] == "bob"
        assert message["read_at"] is None


def test_message_detail_forbidden_for_third_party(client, tokens):
    msg = send(client, tokens["alice"], "bob", "hello")
    response = client.get(f"/messages/{msg['id']}", headers=auth_header(tokens["carol"]))
    assert response.status_code == 401


def test_message_detail_missing(client, tokens):
    response = client.get("/messages/999", headers=auth_header(tokens["alice"]))
    assert response.status_code == 404


def test_mark_read_by_recipient(client, tokens):
    msg = send(client, tokens["alice"], "bob", "hello")
    response = client.post(f"/messages/{msg['id']}/read", headers=auth_header(tokens["bob"]))
    assert response.status_code == 200
    read_message = response.get_json()["readMessage"]
    assert read_message["id"] == msg["id"]
    assert read_message["read_at"] is not None

    response = client.get(f"/messages/{msg['id']}", headers=auth_header(tokens["alice"]))
    assert response.get_json()["message"]["read_at"] == read_message["read_at"]


def test_mark_read_forbidden_for_sender_and_third_party(client, tokens):
    msg = send(client, tokens["alice"], "bob", "hello")
    for name in ("alice", "carol"):
        response = client.post(f"/messages/{msg['id']}/read", headers=auth_header(tokens[name]))
        assert response.status_code == 401

    response = client.get(f"/messages/{msg['id']}", headers=auth_header(tokens["bob"]))
    assert response.get_json()["message"]["read_at"] is None


def test_send_message_non_string_body(client, tokens):
    response = client.post("/messages", json={"to_username": "bob", "body": {"x": 1}},
                           headers=auth_header(tokens["alice"]))
    assert response.status_code == 400


def test_send_message_non_string_recipient(client, tokens):
    response = client.post("/messages", json={"to_username": 7, "body": "hello"},
                           headers=auth_header(tokens["alice"]))
    assert response.status_code == 400


def test_send_message_body_must_be_object(client, tokens):
    response = client.post("/messages", json=["bob", "hello"], headers=auth_header(tokens["alice"]))
    assert response.status_code == 400


def test_send_message_null_from_username_defaults_to_sender(client, tokens):
    response = client.post("/messages",
                           json={"from_username": None, "to_username": "bob", "body": "hello"},
                           headers=auth_header(tokens["alice"]))
    assert response.status_code == 201
    assert response.get_json()["newMessage"]["from_username"] == "alice"


def test_message_timestamps_are_utc(client, tokens):
    msg = send(client, tokens["alice"], "bob", "hello")
    assert msg["sent_at"].endswith("+00:00")

    response = client.post(f"/messages/{msg['id']}/read", headers=auth_header(tokens["bob"]))
    assert response.get_json()["readMessage"]["read_at"].endswith("+00:00")
