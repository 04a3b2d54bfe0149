"""Persistence operations for ``User`` records."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from extensions import db
from models import ROLES, User

from .tokens import issue_token
from .validation import validate_user_payload

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "has already been taken"
TOKEN_ATTEMPTS = 3


def violated_column(exc: IntegrityError) -> str:
    """Name the unique column behind an IntegrityError (username or auth_token)."""
    message = str(exc.orig).lower()
    return "auth_token" if "auth_token" in message else "username"


@dataclass
class StoreResult:
    user: Optional[User] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.user is not None and not self.errors


class UserStore:
    """Thin wrapper around the SQLAlchemy session for the users table."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    # --- reads -----------------------------------------------------------

    def list_users(self) -> List[User]:
        return self.session.query(User).order_by(User.id).all()

    def count(self) -> int:
        return self.session.query(User).count()

    def find_user(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        if not username:
            return None
        return self.session.query(User).filter_by(username=username.strip().lower()).first()

    def find_by_token(self, token: str) -> Optional[User]:
        if not token:
            return None
        return self.session.query(User).filter_by(auth_token=token).first()

    def token_exists(self, token: str) -> bool:
        return self.session.query(User.id).filter_by(auth_token=token).first() is not None

    # --- writes ----------------------------------------------------------

    def create_user(self, payload, require_password: bool = False, role: str = "user") -> StoreResult:
        """Validate ``payload`` and persist a new user with a fresh auth token.

        Nothing is written when validation fails or the username is taken.
        """
        if role not in ROLES:
            raise ValueError(f"unknown role: {role}")

        result = validate_user_payload(
            payload,
            require_password=require_password,
            min_password_length=current_app.config["MIN_PASSWORD_LENGTH"],
        )
        if not result.ok:
            return StoreResult(errors=result.errors)

        data = result.data
        if self.find_by_username(data["username"]) is not None:
            return StoreResult(errors={"username": [USERNAME_TAKEN]})

        user = User(
            firstname=data["firstname"],
            lastname=data["lastname"],
            username=data["username"],
            age=data.get("age"),
            role=role,
        )
        if data.get("password"):
            user.set_password(data["password"])

        for _ in range(TOKEN_ATTEMPTS):
            # token must exist before the row is visible to list/find
            issue_token(user, self.token_exists, current_app.config["AUTH_TOKEN_BYTES"])
            self.session.add(user)
            try:
                self.session.commit()
                break
            except IntegrityError as exc:
                # lost a race against a concurrent create
                self.session.rollback()
                column = violated_column(exc)
                logger.info("Create of %r rejected by unique constraint on %s", data["username"], column)
                if column != "auth_token":
                    return StoreResult(errors={"username": [USERNAME_TAKEN]})
                # never committed, so issue a fresh one
                user.auth_token = None
        else:
            logger.warning("Could not issue a unique auth token for %r", data["username"])
            return StoreResult(errors={"auth_token": ["could not be issued, try again"]})

        logger.info("Created user id=%s username=%s", user.id, user.username)
        return StoreResult(user=user)

    def update_user(self, user: User, payload) -> StoreResult:
        """Apply a partial update; ``auth_token``, ``role`` and ``id`` are not writable."""
        result = validate_user_payload(
            payload,
            partial=True,
            min_password_length=current_app.config["MIN_PASSWORD_LENGTH"],
        )
        if not result.ok:
            return StoreResult(errors=result.errors)

        data = result.data
        new_username = data.get("username")
        if new_username and new_username != user.username:
            other = self.find_by_username(new_username)
            if other is not None and other.id != user.id:
                return StoreResult(errors={"username": [USERNAME_TAKEN]})

        for name in ("firstname", "lastname", "username", "age"):
            if name in data:
                setattr(user, name, data[name])
        if data.get("password"):
            user.set_password(data["password"])

        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            logger.info("Update of user id=%s rejected by unique constraint on %s", user.id, violated_column(exc))
            return StoreResult(errors={"username": [USERNAME_TAKEN]})

        logger.info("Updated user id=%s fields=%s", user.id, sorted(data))
        return StoreResult(user=user)

    def delete_user(self, user: User) -> None:
        user_id = user.id
        self.session.delete(user)
        self.session.commit()
        logger.info("Deleted user id=%s", user_id)

    def authenticate(self, username: str, password: str) -> Optional[User]:
        user = self.find_by_username(username)
        if user is None or not user.check_password(password or ""):
            return None
        return user
