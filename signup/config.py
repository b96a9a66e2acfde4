import os
from datetime import timedelta


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'change-me-please')

    # Database (unset disables persistence)
    DATABASE_URL = os.getenv('DATABASE_URL', '')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Staff access
    STAFF_PASSWORD = os.getenv('STAFF_PASSWORD', 'Arkvic')
    STAFF_SESSION_LIFETIME = timedelta(hours=1)

    # Session cookie: signed, expires one hour after login
    PERMANENT_SESSION_LIFETIME = STAFF_SESSION_LIFETIME
    SESSION_REFRESH_EACH_REQUEST = False
    SESSION_COOKIE_HTTPONLY = True

    # Entries
    EMAIL_DOMAIN = os.getenv('EMAIL_DOMAIN', 'arkvictoria.org')

    # Server
    PORT = int(os.getenv('PORT', '3000'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'true').lower() == 'true'


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    DATABASE_URL = 'sqlite:///:memory:'
    SECRET_KEY = 'testing-secret'
    STAFF_PASSWORD = 'letmein'
    EMAIL_DOMAIN = 'arkvictoria.org'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
