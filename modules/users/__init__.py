"""Users API package."""

from flask import Blueprint

# mounted under app.config["API_PREFIX"] in create_app()
bp = Blueprint("users", __name__)

from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "routes"]
