"""Opaque auth token generation."""

import secrets
from typing import Callable


def generate_token(nbytes: int = 20) -> str:
    """Return a random hex token with ``nbytes`` bytes of entropy."""
    return secrets.token_hex(nbytes)


def issue_token(user, exists: Callable[[str], bool], nbytes: int = 20) -> str:
    """Assign a unique token to ``user`` unless it already has one.

    ``exists`` answers whether a token is already taken by another record.
    An existing token is returned untouched, so re-saving a user never
    rotates it.
    """
    if user.auth_token:
        return user.auth_token

    token = generate_token(nbytes)
    while exists(token):
        token = generate_token(nbytes)

    user.auth_token = token
    return token
