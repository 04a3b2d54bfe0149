"""JSON routes for the users resource."""

from flask import jsonify, url_for
from flask_login import current_user, login_required

from errors import ApiError, ValidationFailed
from permissions import can_edit_user, require_role
from utils import get_payload

from . import bp
from .store import UserStore


def _get_user_or_404(store: UserStore, user_id: int):
    user = store.find_user(user_id)
    if user is None:
        raise ApiError(404, "not_found", f"User {user_id} not found.")
    return user


@bp.route("/users", methods=["GET"], strict_slashes=False)
@login_required
def list_users():
    users = UserStore().list_users()
    return jsonify([user.to_dict() for user in users])


@bp.route("/users/<int:user_id>", methods=["GET"], strict_slashes=False)
@login_required
def show_user(user_id):
    user = _get_user_or_404(UserStore(), user_id)
    return jsonify(user.to_dict(include_token=user.id == current_user.id))


@bp.route("/users", methods=["POST"], strict_slashes=False)
def create_user():
    result = UserStore().create_user(get_payload("user"))
    if not result.ok:
        raise ValidationFailed(result.errors)

    location = url_for("users.show_user", user_id=result.user.id)
    return "", 201, {"Location": location}


@bp.route("/users/<int:user_id>", methods=["PATCH", "PUT"], strict_slashes=False)
@login_required
def update_user(user_id):
    store = UserStore()
    user = _get_user_or_404(store, user_id)
    if not can_edit_user(user):
        raise ApiError(403, "forbidden", "You can only update your own account.")

    result = store.update_user(user, get_payload("user"))
    if not result.ok:
        raise ValidationFailed(result.errors)
    return jsonify(result.user.to_dict(include_token=result.user.id == current_user.id))


@bp.route("/users/<int:user_id>", methods=["DELETE"], strict_slashes=False)
@require_role("admin")
def delete_user(user_id):
    store = UserStore()
    user = _get_user_or_404(store, user_id)
    store.delete_user(user)
    return "", 204
