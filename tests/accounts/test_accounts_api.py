"""Signup / login tests."""

from models import User

SIGNUP = {
    "firstname": "Bob",
    "lastname": "Jones",
    "username": "bjones",
    "password": "correct-horse",
    "age": 42,
}


def test_signup_returns_user_with_token(client, app) -> None:
    response = client.post("/api/signup", json=SIGNUP)

    assert response.status_code == 201
    body = response.get_json()
    assert body["username"] == "bjones"
    assert body["age"] == 42
    assert body["auth_token"]
    assert "password" not in body

    with app.app_context():
        user = User.query.filter_by(username="bjones").one()
        assert user.auth_token == body["auth_token"]
        # stored as a salted hash
        assert user.password != "correct-horse"
        assert user.check_password("correct-horse")


def test_signup_requires_password(client, app) -> None:
    payload = dict(SIGNUP)
    del payload["password"]

    response = client.post("/api/signup", json=payload)

    assert response.status_code == 400
    assert "password" in response.get_json()["errors"]
    with app.app_context():
        assert User.query.count() == 0


def test_signup_short_password(client) -> None:
    response = client.post("/api/signup", json=dict(SIGNUP, password="short"))
    assert response.status_code == 400
    assert response.get_json()["errors"]["password"][0].startswith("is too short")


def test_signup_duplicate_username(client, app) -> None:
    assert client.post("/api/signup", json=SIGNUP).status_code == 201

    response = client.post("/api/signup", json=SIGNUP)

    assert response.status_code == 400
    with app.app_context():
        assert User.query.count() == 1


def test_login_returns_existing_token(client) -> None:
    token = client.post("/api/signup", json=SIGNUP).get_json()["auth_token"]

    response = client.post("/api/login", json={"username": "bjones", "password": "correct-horse"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["auth_token"] == token
    assert body["user"]["username"] == "bjones"

    # logging in again never rotates the token
    again = client.post("/api/login", json={"username": "BJONES", "password": "correct-horse"})
    assert again.get_json()["auth_token"] == token


def test_login_bad_password_is_401(client) -> None:
    client.post("/api/signup", json=SIGNUP)

    response = client.post("/api/login", json={"username": "bjones", "password": "wrong-password"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"
    assert "auth_token" not in response.get_json()


def test_login_unknown_user_is_401(client) -> None:
    response = client.post("/api/login", json={"username": "ghost", "password": "whatever123"})
    assert response.status_code == 401


def test_login_missing_fields_is_400(client) -> None:
    response = client.post("/api/login", json={"username": "bjones"})
    assert response.status_code == 400
    assert response.get_json()["errors"] == {"password": ["can't be blank"]}


def test_passwordless_account_cannot_login(client) -> None:
    client.post("/api/users", json={"firstname": "No", "lastname": "Pass", "username": "nopass"})

    response = client.post("/api/login", json={"username": "nopass", "password": "anything-at-all"})
    assert response.status_code == 401


def test_me_returns_self_with_token(client, bearer) -> None:
    token = client.post("/api/signup", json=SIGNUP).get_json()["auth_token"]

    response = client.get("/api/me", headers=bearer(token))

    assert response.status_code == 200
    assert response.get_json()["username"] == "bjones"
    assert response.get_json()["auth_token"] == token


def test_me_requires_token(client) -> None:
    assert client.get("/api/me").status_code == 401


def test_token_auth_is_stateless(client, bearer) -> None:
    token = client.post("/api/signup", json=SIGNUP).get_json()["auth_token"]
    assert client.get("/api/me", headers=bearer(token)).status_code == 200

    # no cookie session survives between requests
    assert client.get("/api/me").status_code == 401
