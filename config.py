import os

from app.constants import BID_INCREMENTS, DEFAULT_BASE_PRICE, DEFAULT_TEAM_BUDGET


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///auction.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Operator login (single operator per auction)
    OPERATOR_USERNAME = os.environ.get('OPERATOR_USERNAME') or 'operator'
    OPERATOR_PASSWORD = os.environ.get('OPERATOR_PASSWORD')
    OPERATOR_PASSWORD_HASH = os.environ.get('OPERATOR_PASSWORD_HASH')

    # Auction settings
    DEFAULT_TEAM_BUDGET = DEFAULT_TEAM_BUDGET
    DEFAULT_BASE_PRICE = DEFAULT_BASE_PRICE
    BID_INCREMENTS = BID_INCREMENTS

    RATELIMIT_ENABLED = True


class DevelopmentConfig(Config):
    """Local development configuration"""
    DEBUG = True
    OPERATOR_PASSWORD = os.environ.get('OPERATOR_PASSWORD') or 'operator'


class TestingConfig(Config):
    """Configuration used by the test suite"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    OPERATOR_USERNAME = 'operator'
    OPERATOR_PASSWORD = 'test-password'
    OPERATOR_PASSWORD_HASH = None


class ProductionConfig(Config):
    """Production configuration"""
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
