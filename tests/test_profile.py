import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from devconnector.models.profile import ProfileDB
from devconnector.models.user import UserDB

PROFILE = {
    "status": "Developer",
    "skills": "js, node, react",
    "company": "Acme",
    "bio": "Builds things",
    "githubusername": "alice",
    "twitter": "https://twitter.com/alice",
}


def auth(token):
    return {"x-auth-token": token}


def messages(response):
    return [error["message"] for error in response.json()["errors"]]


def experience(title, **extra):
    return {"title": title, "company": "Acme", "from": "2020-01-01", **extra}


@pytest.fixture
def token(register):
    return register()


@pytest.fixture
def profile(client, token):
    response = client.post("/api/profile", json=PROFILE, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()


def test_create_profile(profile):
    assert profile["status"] == "Developer"
    assert profile["skills"] == ["js", "node", "react"]
    assert profile["company"] == "Acme"
    assert profile["githubusername"] == "alice"
    assert profile["social"]["twitter"] == "https://twitter.com/alice"
    assert profile["social"]["youtube"] is None
    assert profile["website"] is None
    assert profile["experience"] == []
    assert profile["user"]["name"] == "Alice"
    assert profile["user"]["avatar"].startswith("//www.gravatar.com/avatar/")


def test_update_only_touches_sent_fields(client, token, profile):
    response = client.post(
        "/api/profile",
        json={"status": "Senior Developer", "skills": "python", "website": "https://alice.dev", "youtube": "yt"},
        headers=auth(token),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == profile["id"]
    assert body["status"] == "Senior Developer"
    assert body["skills"] == ["python"]
    assert body["website"] == "https://alice.dev"
    assert body["company"] == "Acme"
    assert body["bio"] == "Builds things"
    assert body["social"]["twitter"] == "https://twitter.com/alice"
    assert body["social"]["youtube"] == "yt"


def test_explicit_null_clears_field(client, token, profile):
    response = client.post(
        "/api/profile",
        json={"status": "Developer", "skills": "js", "company": None},
        headers=auth(token),
    )

    assert response.status_code == 200
    assert response.json()["company"] is None
    assert response.json()["bio"] == "Builds things"


def test_one_profile_per_user(client, app, token, profile):
    client.post("/api/profile", json=PROFILE, headers=auth(token))

    with app.state.session_factory() as db:
        assert db.query(ProfileDB).count() == 1


def test_profile_requires_status_and_skills(client, token):
    response = client.post("/api/profile", json={"skills": " , "}, headers=auth(token))

    assert response.status_code == 400
    assert sorted(messages(response)) == ["Skills is required", "Status is required"]


def test_profile_routes_need_token(client):
    assert client.post("/api/profile", json=PROFILE).status_code == 401
    assert client.get("/api/profile/me").status_code == 401
    assert client.delete("/api/profile").status_code == 401
    assert client.put("/api/profile/experience", json=experience("Dev")).status_code == 401
    assert client.delete("/api/profile/experience/abc").status_code == 401


def test_own_profile(client, token, profile):
    response = client.get("/api/profile/me", headers=auth(token))

    assert response.status_code == 200
    assert response.json()["id"] == profile["id"]


def test_own_profile_missing(client, token):
    response = client.get("/api/profile/me", headers=auth(token))

    assert response.status_code == 400
    assert messages(response) == ["There is no profile for this user"]


def test_list_profiles(client, register, profile):
    bob = register(name="Bob", email="bob@mail.com")
    client.post("/api/profile", json={"status": "Designer", "skills": "figma"}, headers=auth(bob))

    response = client.get("/api/profile")

    assert response.status_code == 200
    assert sorted(p["user"]["name"] for p in response.json()) == ["Alice", "Bob"]


def test_profile_by_user_id(client, profile):
    response = client.get(f"/api/profile/user/{profile['user']['id']}")

    assert response.status_code == 200
    assert response.json()["id"] == profile["id"]


def test_profile_by_invalid_and_unknown_user_id(client, profile):
    malformed = client.get("/api/profile/user/not-an-id")
    unknown = client.get(f"/api/profile/user/{uuid.uuid4()}")

    assert malformed.status_code == unknown.status_code == 404
    assert malformed.json() == unknown.json() == {"errors": [{"message": "Profile not found"}]}


def test_delete_profile_removes_user(client, app, token, profile):
    response = client.delete("/api/profile", headers=auth(token))

    assert response.status_code == 200
    assert response.json() == {"message": "User deleted"}
    assert client.get(f"/api/profile/user/{profile['user']['id']}").status_code == 404
    assert client.get("/api/auth", headers=auth(token)).status_code == 401
    with app.state.session_factory() as db:
        assert db.query(UserDB).count() == 0
        assert db.query(ProfileDB).count() == 0

    assert client.delete("/api/profile", headers=auth(token)).status_code == 200


def test_deleted_user_cannot_create_profile(client, app, register):
    alice = register()
    bob = register(name="Bob", email="bob@mail.com")
    client.post("/api/profile", json={"status": "Designer", "skills": "figma"}, headers=auth(bob))
    client.delete("/api/profile", headers=auth(alice))

    response = client.post("/api/profile", json=PROFILE, headers=auth(alice))

    assert response.status_code == 401
    assert messages(response) == ["User not found"]
    listing = client.get("/api/profile")
    assert listing.status_code == 200
    assert [p["user"]["name"] for p in listing.json()] == ["Bob"]


def test_profile_needs_existing_user(client, app):
    with app.state.session_factory() as db:
        db.add(ProfileDB(user_id=str(uuid.uuid4()), status="Developer", skills=["js"]))
        with pytest.raises(IntegrityError):
            db.commit()


def test_deleting_user_cascades_to_profile(client, app, profile):
    with app.state.session_factory() as db:
        db.query(UserDB).filter(UserDB.id == profile["user"]["id"]).delete()
        db.commit()
        assert db.query(ProfileDB).count() == 0

def test_experience_is_most_recent_first(client, token, profile):
    client.put("/api/profile/experience", json=experience("E1"), headers=auth(token))
    response = client.put(
        "/api/profile/experience",
        json=experience("E2", to="2021-06-30", location="Remote", description="Backend"),
        headers=auth(token),
    )

    assert response.status_code == 200
    entries = response.json()["experience"]
    assert [entry["title"] for entry in entries] == ["E2", "E1"]
    assert entries[0]["from"] == "2020-01-01"
    assert entries[0]["to"] == "2021-06-30"
    assert entries[0]["current"] is False
    assert entries[1]["to"] is None
    assert entries[0]["id"] != entries[1]["id"]


def test_experience_validation(client, token, profile):
    response = client.put("/api/profile/experience", json={"title": ""}, headers=auth(token))

    assert response.status_code == 400
    assert sorted(messages(response)) == ["Company is required", "From date is required", "Title is required"]


def test_experience_without_profile(client, token):
    response = client.put("/api/profile/experience", json=experience("E1"), headers=auth(token))

    assert response.status_code == 404
    assert messages(response) == ["Profile not found"]


def test_remove_experience(client, token, profile):
    for title in ("E1", "E2", "E3"):
        response = client.put("/api/profile/experience", json=experience(title), headers=auth(token))
    middle = response.json()["experience"][1]

    response = client.delete(f"/api/profile/experience/{middle['id']}", headers=auth(token))

    assert response.status_code == 200
    assert [entry["title"] for entry in response.json()["experience"]] == ["E3", "E1"]


def test_remove_unknown_experience_keeps_list(client, token, profile):
    client.put("/api/profile/experience", json=experience("E1"), headers=auth(token))
    client.put("/api/profile/experience", json=experience("E2"), headers=auth(token))

    response = client.delete(f"/api/profile/experience/{uuid.uuid4()}", headers=auth(token))

    assert response.status_code == 200
    assert [entry["title"] for entry in response.json()["experience"]] == ["E2", "E1"]


def test_remove_experience_without_profile(client, token):
    response = client.delete(f"/api/profile/experience/{uuid.uuid4()}", headers=auth(token))

    assert response.status_code == 404
    assert messages(response) == ["Profile not found"]
