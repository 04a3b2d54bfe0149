from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Extensions are created unbound and attached in create_app()

# Database
db = SQLAlchemy()

# Token authentication (request_loader only, no cookie sessions)
login_manager = LoginManager()
