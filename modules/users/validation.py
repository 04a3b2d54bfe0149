"""Payload validation for user records.

Validators never raise: they return a ``ValidationResult`` holding the cleaned
values and a ``field -> [messages]`` mapping, and the caller decides which
status code to answer with.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,150}$")
NAME_MAX_LENGTH = 100
MIN_AGE = 0
MAX_AGE = 150

REQUIRED_FIELDS = ("firstname", "lastname", "username")


@dataclass
class ValidationResult:
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, name: str, message: str) -> None:
        self.errors.setdefault(name, []).append(message)


def _clean_name(result: ValidationResult, name: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        result.add_error(name, "can't be blank")
        return
    value = value.strip()
    if len(value) > NAME_MAX_LENGTH:
        result.add_error(name, f"is too long (maximum is {NAME_MAX_LENGTH} characters)")
        return
    result.data[name] = value


def _clean_username(result: ValidationResult, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        result.add_error("username", "can't be blank")
        return
    value = value.strip()
    if not USERNAME_RE.match(value):
        result.add_error(
            "username",
            "must be 3-150 characters of letters, digits, '_', '.' or '-'",
        )
        return
    # uniqueness is case-insensitive
    result.data["username"] = value.lower()


def _clean_age(result: ValidationResult, value: Any) -> None:
    if value is None:
        result.data["age"] = None
        return
    # bool is an int subclass; "age": true is not an age
    if isinstance(value, bool):
        result.add_error("age", "must be an integer")
        return
    if isinstance(value, str):
        value = value.strip()
        # ascii only: isdigit() also accepts "²" and other unicode digits
        if not (value.isascii() and value.isdigit()) or len(value) > 3:
            result.add_error("age", "must be an integer")
            return
        value = int(value)
    if not isinstance(value, int):
        result.add_error("age", "must be an integer")
        return
    if not MIN_AGE <= value <= MAX_AGE:
        result.add_error("age", f"must be between {MIN_AGE} and {MAX_AGE}")
        return
    result.data["age"] = value


def _clean_password(result: ValidationResult, value: Any, min_length: int) -> None:
    if not isinstance(value, str) or not value:
        result.add_error("password", "can't be blank")
        return
    if len(value) < min_length:
        result.add_error("password", f"is too short (minimum is {min_length} characters)")
        return
    result.data["password"] = value


def validate_user_payload(
    payload: Any,
    partial: bool = False,
    require_password: bool = False,
    min_password_length: int = 8,
) -> ValidationResult:
    """Validate a create (``partial=False``) or update (``partial=True``) payload.

    Unknown keys are ignored, including ``id``, ``auth_token`` and ``role``.
    """
    result = ValidationResult()
    if not isinstance(payload, dict):
        result.add_error("payload", "must be a JSON object")
        return result

    for name in ("firstname", "lastname"):
        if name in payload:
            _clean_name(result, name, payload[name])
        elif not partial:
            result.add_error(name, "can't be blank")

    if "username" in payload:
        _clean_username(result, payload["username"])
    elif not partial:
        result.add_error("username", "can't be blank")

    if "age" in payload:
        _clean_age(result, payload["age"])

    if "password" in payload and (payload["password"] is not None or require_password):
        _clean_password(result, payload["password"], min_password_length)
    elif require_password and not partial:
        result.add_error("password", "can't be blank")

    return result
