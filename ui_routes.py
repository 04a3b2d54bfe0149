# ui_routes.py: non-API routes served outside the API prefix
from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from extensions import db

ui = Blueprint("ui", __name__)


@ui.route("/")
def home():
    prefix = current_app.config["API_PREFIX"]
    return jsonify({
        "service": "users-api",
        "api": prefix,
        "endpoints": [
            f"GET {prefix}/users",
            f"GET {prefix}/users/<id>",
            f"POST {prefix}/users",
            f"POST {prefix}/signup",
            f"POST {prefix}/login",
        ],
    })


@ui.route("/health")
def health():
    db.session.execute(text("SELECT 1"))
    return jsonify({"status": "ok"})
