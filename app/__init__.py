import os
import uuid

from flask import Flask, g
from flask_sqlalchemy import SQLAlchemy
from flask_socketio import SocketIO

db = SQLAlchemy()
socketio = SocketIO()


def create_app(config_name=None):
    """Application factory pattern"""
    from config import config

    config_name = config_name or os.environ.get('FLASK_CONFIG', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Initialize extensions
    from app.extensions import csrf, limiter
    db.init_app(app)
    socketio.init_app(app, cors_allowed_origins="*")
    limiter.init_app(app)
    csrf.init_app(app)

    @app.before_request
    def assign_request_id():
        g.request_id = uuid.uuid4().hex[:8]

    from app.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from app.routes import main_bp, api_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    # Create database tables
    with app.app_context():
        from app import models  # noqa: F401
        db.create_all()

    return app
