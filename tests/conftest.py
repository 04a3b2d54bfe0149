# tests/conftest.py
import os
import sys
import pytest

# so that `import app` works when running from the repo root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app
from extensions import db
from modules.users.store import UserStore


TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "SECRET_KEY": "test-secret",
    "API_PREFIX": "/api",
    "CORS_ALLOW_ORIGINS": ["*"],
    "CORS_ALLOW_CREDENTIALS": False,
    "MIN_PASSWORD_LENGTH": 8,
    "AUTH_TOKEN_BYTES": 20,
}


@pytest.fixture()
def app():
    app = create_app(TEST_CONFIG)
    # no app context is held here: every test-client request gets its own,
    # so nothing cached on flask.g leaks from one request into the next
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Create a user through the store and return plain values (id, username, token)."""
    seq = {"n": 0}

    def _make(username=None, password="correct-horse", role="user", **fields):
        seq["n"] += 1
        payload = {
            "firstname": "Test",
            "lastname": "User",
            "username": username or f"user{seq['n']}",
            "password": password,
        }
        payload.update(fields)
        with app.app_context():
            result = UserStore().create_user(payload, role=role)
            assert result.ok, result.errors
            return {
                "id": result.user.id,
                "username": result.user.username,
                "token": result.user.auth_token,
            }

    return _make


@pytest.fixture()
def bearer():
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _headers
