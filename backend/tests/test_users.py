from fastapi.testclient import TestClient
from sqlmodel import Session, func, select

from places_api.models.user import DEFAULT_USER_IMAGE, User


def count_users(session: Session) -> int:
    return session.exec(select(func.count()).select_from(User)).one()


def test_signup_creates_user_without_places(client: TestClient):
    response = client.post(
        "/api/users/signup",
        json={"username": "u1", "email": "A@X.com ", "password": "secret123"},
    )

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["username"] == "u1"
    assert user["email"] == "a@x.com"
    assert user["places"] == []
    assert user["image"] == DEFAULT_USER_IMAGE
    assert "password" not in user


def test_signup_duplicate_email_and_username_is_conflict(client: TestClient, session: Session, user):
    response = client.post(
        "/api/users/signup",
        json={"username": "u1", "email": "a@x.com", "password": "another1"},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "User exists already, please login instead."
    assert count_users(session) == 1


def test_signup_same_email_other_username_is_allowed(client: TestClient, session: Session, user):
    """Only the (email, username) pair is checked"""
    response = client.post(
        "/api/users/signup",
        json={"username": "u2", "email": "a@x.com", "password": "secret123"},
    )

    assert response.status_code == 201
    assert count_users(session) == 2


def test_signup_rejects_bad_input(client: TestClient, session: Session):
    bad_bodies = [
        {"username": "", "email": "a@x.com", "password": "secret123"},
        {"username": "u1", "email": "not-an-email", "password": "secret123"},
        {"username": "u1", "email": "a@x.com", "password": "123"},
        {"username": "u1", "email": "a@x.com"},
    ]
    for body in bad_bodies:
        assert client.post("/api/users/signup", json=body).status_code == 422
    assert count_users(session) == 0


def test_list_users_hides_passwords(client: TestClient, user):
    response = client.get("/api/users")

    assert response.status_code == 200
    users = response.json()["users"]
    assert [u["id"] for u in users] == [user["id"]]
    assert all("password" not in u for u in users)


def test_get_user(client: TestClient, user):
    response = client.get(f"/api/users/{user['id']}")
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "a@x.com"


def test_get_user_not_found(client: TestClient):
    assert client.get("/api/users/missing").status_code == 404


def test_login_success(client: TestClient, user):
    response = client.post("/api/users/login", json={"email": "a@x.com", "password": "secret123"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Logged In Successfully"
    assert body["user"]["id"] == user["id"]
    assert "password" not in body["user"]


def test_login_wrong_password(client: TestClient, user):
    response = client.post("/api/users/login", json={"email": "a@x.com", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Could not identify user, credentials seem to be wrong."


def test_login_unknown_email(client: TestClient, user):
    response = client.post("/api/users/login", json={"email": "b@x.com", "password": "secret123"})
    assert response.status_code == 401


def test_delete_user(client: TestClient, session: Session, user):
    response = client.delete(f"/api/users/{user['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Successfully Deleted user."}
    assert count_users(session) == 0


def test_delete_missing_user_is_401(client: TestClient):
    response = client.delete("/api/users/missing")
    assert response.status_code == 401


def test_delete_user_keeps_places(client: TestClient, user, place_payload):
    """Places are not cascaded; they keep pointing at the deleted user"""
    place_id = client.post("/api/places", json=place_payload).json()["place"]["id"]

    client.delete(f"/api/users/{user['id']}")

    response = client.get(f"/api/places/{place_id}")
    assert response.status_code == 200
    assert response.json()["place"]["creator"] == user["id"]

    # Deleting the orphaned place still works
    assert client.delete(f"/api/places/{place_id}").status_code == 200
