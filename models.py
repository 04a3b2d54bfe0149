"""Shared SQLAlchemy models."""

from datetime import datetime, timezone

from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash

from extensions import db

ROLES = ("user", "admin")


class User(UserMixin, db.Model):
    """An API account authenticated by an opaque token."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    firstname = db.Column(db.String(100), nullable=False)
    lastname = db.Column(db.String(100), nullable=False)
    username = db.Column(db.String(150), unique=True, nullable=False)
    age = db.Column(db.Integer)
    password = db.Column(db.String(255))  # werkzeug hash, never plaintext
    auth_token = db.Column(db.String(64), unique=True, index=True)
    role = db.Column(db.String(20), nullable=False, default="user")  # user, admin
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def set_password(self, raw_password: str) -> None:
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password: str) -> bool:
        if not self.password:
            return False
        return check_password_hash(self.password, raw_password)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def to_dict(self, include_token: bool = False) -> dict:
        data = {
            "id": self.id,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "age": self.age,
            "username": self.username,
            "role": self.role,
        }
        if include_token:
            data["auth_token"] = self.auth_token
        return data

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.username}>"
