from datetime import datetime, timedelta, timezone

from devconnector.models.user import UserDB


def auth(token):
    return {"x-auth-token": token}


def messages(response):
    return [error["message"] for error in response.json()["errors"]]


def test_register_returns_token(client):
    response = client.post(
        "/api/users",
        json={"name": "Alice", "email": "alice@mail.com", "password": "secret123"},
    )
    assert response.status_code == 201
    assert response.json()["token"]


def test_register_reports_every_invalid_field(client):
    response = client.post("/api/users", json={"name": " ", "email": "not-an-email", "password": "123"})

    assert response.status_code == 400
    assert sorted(messages(response)) == sorted([
        "Name is required",
        "Please include a valid email",
        "A password should be at least 6 characters long",
    ])
    assert {error["field"] for error in response.json()["errors"]} == {"name", "email", "password"}


def test_register_with_missing_fields(client):
    response = client.post("/api/users", json={})

    assert response.status_code == 400
    assert len(messages(response)) == 3


def test_register_without_body_reports_every_rule(client):
    response = client.post("/api/users")

    assert response.status_code == 400
    assert sorted(messages(response)) == sorted([
        "Name is required",
        "Please include a valid email",
        "A password should be at least 6 characters long",
    ])
    assert {error["field"] for error in response.json()["errors"]} == {"name", "email", "password"}


def test_duplicate_email_rejected(client, app, register):
    register()
    response = client.post(
        "/api/users",
        json={"name": "Other", "email": "alice@mail.com", "password": "another1"},
    )

    assert response.status_code == 400
    assert messages(response) == ["User already exists"]

    with app.state.session_factory() as db:
        assert db.query(UserDB).filter(UserDB.email == "alice@mail.com").count() == 1


def test_register_stores_hash_and_avatar(client, app, register):
    register()
    with app.state.session_factory() as db:
        user = db.query(UserDB).filter(UserDB.email == "alice@mail.com").one()

    assert user.hashed_password != "secret123"
    assert user.hashed_password.startswith("$2b$")
    assert user.avatar.startswith("//www.gravatar.com/avatar/")
    assert user.avatar.endswith("?s=200&r=pg&d=mm")


def test_login_returns_token(client, register):
    register()
    response = client.post("/api/auth", json={"email": "alice@mail.com", "password": "secret123"})

    assert response.status_code == 200
    assert response.json()["token"]


def test_login_failures_do_not_reveal_which_field_was_wrong(client, register):
    register()
    wrong_password = client.post("/api/auth", json={"email": "alice@mail.com", "password": "nope-nope"})
    unknown_email = client.post("/api/auth", json={"email": "bob@mail.com", "password": "secret123"})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json()
    assert messages(wrong_password) == ["Invalid credentials"]


def test_login_validation(client):
    response = client.post("/api/auth", json={"email": "bad"})

    assert response.status_code == 400
    assert sorted(messages(response)) == ["Please include a valid email", "Please provide a password"]


def test_current_user_without_password(client, register):
    token = register()
    response = client.get("/api/auth", headers=auth(token))

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Alice"
    assert body["email"] == "alice@mail.com"
    assert "hashed_password" not in body
    assert "password" not in body


def test_missing_token(client):
    response = client.get("/api/auth")

    assert response.status_code == 401
    assert messages(response) == ["No token header, authorization denied"]


def test_invalid_token(client):
    response = client.get("/api/auth", headers=auth("not-a-token"))

    assert response.status_code == 401
    assert messages(response) == ["Token is not valid, can not authorize the user"]


def test_expired_token(client, app, register):
    register()
    issued_at = datetime.now(timezone.utc) - timedelta(seconds=36001)
    with app.state.session_factory() as db:
        user_id = db.query(UserDB).one().id
    token = app.state.token_service.issue(user_id, now=issued_at)

    response = client.get("/api/auth", headers=auth(token))

    assert response.status_code == 401
    assert messages(response) == ["Token is not valid, can not authorize the user"]


def test_current_user_gone(client, app):
    token = app.state.token_service.issue("7d7a3c7e-0000-4000-8000-000000000000")
    response = client.get("/api/auth", headers=auth(token))

    assert response.status_code == 401
    assert messages(response) == ["User not found"]
