"""CORS headers must be present on every response, errors included."""

import pytest

from app import create_app
from cors import CORSConfig
from extensions import db
from conftest import TEST_CONFIG

ORIGIN = "https://app.example.com"


def test_header_on_success(client) -> None:
    response = client.get("/", headers={"Origin": ORIGIN})
    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_header_on_created(client) -> None:
    response = client.post(
        "/api/users",
        json={"firstname": "A", "lastname": "B", "username": "abc"},
        headers={"Origin": ORIGIN},
    )
    assert response.status_code == 201
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "Location" in response.headers["Access-Control-Expose-Headers"]


@pytest.mark.parametrize(
    "method, path, status",
    [
        ("get", "/api/users", 401),
        ("get", "/api/nowhere", 404),
        ("delete", "/api/signup", 405),
        ("post", "/api/users", 400),
        ("post", "/api/login", 400),
    ],
)
def test_header_on_errors(client, method, path, status) -> None:
    response = getattr(client, method)(path, json={}, headers={"Origin": ORIGIN})
    assert response.status_code == status
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.get_json()["error"]


def test_header_on_unknown_user(client, make_user, bearer) -> None:
    user = make_user()
    response = client.get("/api/users/404", headers=bearer(user["token"]))
    assert response.status_code == 404
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_preflight_skips_authentication(client) -> None:
    response = client.options(
        "/api/users",
        headers={
            "Origin": ORIGIN,
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Authorization",
        },
    )
    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "GET" in response.headers["Access-Control-Allow-Methods"]
    assert "Authorization" in response.headers["Access-Control-Allow-Headers"]
    assert response.headers["Access-Control-Max-Age"] == "86400"


@pytest.fixture()
def restricted_client():
    app = create_app(dict(TEST_CONFIG, CORS_ALLOW_ORIGINS=[ORIGIN]))
    yield app.test_client()
    with app.app_context():
        db.drop_all()


def test_allow_list_echoes_known_origin(restricted_client) -> None:
    response = restricted_client.get("/api/users", headers={"Origin": ORIGIN})
    assert response.status_code == 401
    assert response.headers["Access-Control-Allow-Origin"] == ORIGIN
    assert "Origin" in response.headers["Vary"]


def test_allow_list_omits_unknown_origin(restricted_client) -> None:
    response = restricted_client.get("/", headers={"Origin": "https://evil.example"})
    assert response.status_code == 200
    assert "Access-Control-Allow-Origin" not in response.headers


def test_credentials_never_use_wildcard() -> None:
    cors = CORSConfig(allow_origins=["*"], allow_credentials=True)
    assert cors.resolve_origin(ORIGIN) == ORIGIN
    assert cors.resolve_origin(None) is None


def test_wildcard_without_origin_header() -> None:
    assert CORSConfig().resolve_origin(None) == "*"


def test_header_on_unhandled_error(app) -> None:
    @app.route("/boom")
    def boom():
        raise RuntimeError("boom")

    response = app.test_client().get("/boom")

    assert response.status_code == 500
    assert response.get_json()["error"] == "internal_server_error"
    assert response.headers["Access-Control-Allow-Origin"] == "*"
