"""Signup and login.

Login does not open a session: it checks the credentials and hands back the
token issued at signup, which the client then sends on every request.
"""

import logging

from flask import jsonify
from flask_login import current_user, login_required

from errors import ApiError, ValidationFailed
from modules.users.store import UserStore
from utils import get_payload

from . import bp

logger = logging.getLogger(__name__)


@bp.route("/signup", methods=["POST"], strict_slashes=False)
def signup():
    result = UserStore().create_user(get_payload("user"), require_password=True)
    if not result.ok:
        raise ValidationFailed(result.errors)

    logger.info("Signup for username=%s", result.user.username)
    return jsonify(result.user.to_dict(include_token=True)), 201


@bp.route("/login", methods=["POST"], strict_slashes=False)
def login():
    payload = get_payload("user")
    username = payload.get("username")
    password = payload.get("password")

    missing = {
        name: ["can't be blank"]
        for name, value in (("username", username), ("password", password))
        if not isinstance(value, str) or not value
    }
    if missing:
        raise ValidationFailed(missing)

    user = UserStore().authenticate(username, password)
    if user is None:
        logger.warning("Failed login for username=%s", username)
        raise ApiError(401, "invalid_credentials", "Invalid username or password.")

    logger.info("Login for user id=%s", user.id)
    return jsonify({"auth_token": user.auth_token, "user": user.to_dict()})


@bp.route("/me", methods=["GET"], strict_slashes=False)
@login_required
def me():
    return jsonify(current_user.to_dict(include_token=True))
