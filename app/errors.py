"""
Centralized error handling for the application.

Every rejected auction operation reaches the client as
``{"success": false, "error": <message>, "reason": <error class>}`` with the
status code carried by the exception. HTTP errors raised by Flask itself
get the same envelope with a generic message.
"""

from flask import Flask, jsonify
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException

from app.logger import get_logger
from app.services.base import ServiceError

logger = get_logger(__name__)

GENERIC_MESSAGES = {
    400: 'Bad request',
    403: 'Access forbidden',
    404: 'Resource not found',
    405: 'Method not allowed',
    429: 'Too many requests. Please try again later.',
}


def register_error_handlers(app: Flask) -> None:
    """Register centralized error handlers with the Flask app."""

    @app.errorhandler(ServiceError)
    def handle_service_error(error: ServiceError):
        if error.status_code >= 500:
            logger.error(f"Service error: {error.message}")
        else:
            logger.warning(f"Rejected ({type(error).__name__}): {error.message}")
        return jsonify({
            'success': False,
            'error': error.message,
            'reason': type(error).__name__,
        }), error.status_code

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error: CSRFError):
        logger.warning(f"CSRF check failed: {error.description}")
        return jsonify({
            'success': False,
            'error': error.description,
            'reason': 'CSRFError',
        }), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        message = GENERIC_MESSAGES.get(error.code, error.name)
        return jsonify({'success': False, 'error': message}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        """Log the traceback and hide internal details from the client."""
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'An internal error occurred'
        }), 500
