import os


def _csv(value):
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev_secret_key')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///users.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # all JSON routes live under this prefix
    API_PREFIX = os.getenv('API_PREFIX', '/api')

    CORS_ALLOW_ORIGINS = _csv(os.getenv('CORS_ALLOW_ORIGINS', '*'))
    CORS_ALLOW_METHODS = _csv(os.getenv('CORS_ALLOW_METHODS', 'GET, POST, PUT, PATCH, DELETE, OPTIONS'))
    CORS_ALLOW_HEADERS = _csv(os.getenv('CORS_ALLOW_HEADERS', 'Authorization, Content-Type, X-Requested-With'))
    CORS_EXPOSE_HEADERS = _csv(os.getenv('CORS_EXPOSE_HEADERS', 'Location'))
    CORS_ALLOW_CREDENTIALS = os.getenv('CORS_ALLOW_CREDENTIALS', 'false').lower() in ('1', 'true', 'yes')
    CORS_MAX_AGE = int(os.getenv('CORS_MAX_AGE', '86400'))

    AUTH_TOKEN_BYTES = int(os.getenv('AUTH_TOKEN_BYTES', '20'))
    MIN_PASSWORD_LENGTH = int(os.getenv('MIN_PASSWORD_LENGTH', '8'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
