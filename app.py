import logging

from flask import Flask
from dotenv import load_dotenv

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from extensions import db, login_manager  # noqa: E402  (load_dotenv needs to run first)

LOGGERS = ("app", "auth", "cors", "errors", "modules")


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    if not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(level)
    for name in LOGGERS:
        logging.getLogger(name).setLevel(level)


def create_app(test_config=None) -> Flask:
    """Application factory for the users JSON API."""

    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    configure_logging(app)

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)
    # tokens only: never fall back to the cookie session
    login_manager.session_protection = None

    import auth  # noqa: F401  registers request_loader / unauthorized handler

    from cors import init_cors
    from errors import register_error_handlers

    register_error_handlers(app)
    init_cors(app)

    # blueprints
    from modules.users import bp as users_bp
    from modules.accounts import bp as accounts_bp

    api_prefix = app.config["API_PREFIX"].rstrip("/")
    app.register_blueprint(users_bp, url_prefix=api_prefix)
    app.register_blueprint(accounts_bp, url_prefix=api_prefix)

    from ui_routes import ui
    app.register_blueprint(ui)  # "/" and "/health", outside the API prefix

    # DB
    with app.app_context():
        # models must be imported before create_all()
        import models  # noqa: F401

        db.create_all()

    app.logger.info("API mounted at %s", api_prefix or "/")
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
