# permissions.py
"""
Role checks for API routes.

- role_required([...]) is the main decorator (admin always passes).
- require_role(*roles) is a variadic shortcut for the same thing.

Roles:
- user   can read accounts and edit their own
- admin  can do everything, including deleting accounts
"""

from functools import wraps
from typing import Iterable, Set

from flask_login import current_user, login_required

from errors import ApiError


def role_required(allowed_roles: Iterable[str]):
    """
    Restrict a view to the given roles.

        @role_required(["admin"])
        def view(): ...

    - No valid token: 401 (via login_required).
    - Authenticated, wrong role: 403.
    """
    if isinstance(allowed_roles, str):
        allowed: Set[str] = {allowed_roles}
    else:
        allowed = set(allowed_roles or [])

    def decorator(view_func):
        @wraps(view_func)
        @login_required
        def wrapped(*args, **kwargs):
            role = getattr(current_user, "role", None)
            if role == "admin" or role in allowed:
                return view_func(*args, **kwargs)
            raise ApiError(403, "forbidden", "You are not allowed to perform this action.")

        return wrapped
    return decorator


def require_role(*roles: str):
    """Equivalent to role_required(list(roles))."""
    return role_required(list(roles))


def can_edit_user(user) -> bool:
    """Users may edit themselves; admins may edit anyone."""
    return bool(
        current_user.is_authenticated
        and (current_user.id == user.id or current_user.is_admin)
    )
