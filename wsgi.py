"""
WSGI entry point for production deployment.

Set the operator credentials and secret key through the environment
before starting the server:

    SECRET_KEY, OPERATOR_USERNAME, OPERATOR_PASSWORD_HASH, DATABASE_URL
"""

import os

os.environ.setdefault('FLASK_CONFIG', 'production')

from app import create_app  # noqa: E402

application = create_app(os.environ.get('FLASK_CONFIG', 'production'))
