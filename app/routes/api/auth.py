"""
Operator login endpoints.

A single operator account runs the auction; everyone else gets the
read-only views.
"""

from flask import current_app, jsonify, request, session
from flask_wtf.csrf import generate_csrf

from app.auth import check_operator_credentials
from app.extensions import limiter
from app.logger import get_api_logger, log_audit
from app.routes import api_bp
from app.utils import error_response, is_operator

logger = get_api_logger()


@api_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Log in as the auction operator.

    Accepts JSON or form data with ``username`` and ``password``.
    """
    data = request.get_json(silent=True) or request.form
    username = data.get('username')
    password = data.get('password')

    if not check_operator_credentials(username, password, current_app.config):
        logger.warning(f"Failed operator login for {username!r}")
        return error_response('Invalid credentials', 401)

    session['is_operator'] = True
    session.permanent = True
    log_audit('operator_login', 'session')
    return jsonify({'success': True})


@api_bp.route('/logout', methods=['POST'])
def logout():
    session.pop('is_operator', None)
    return jsonify({'success': True})


@api_bp.route('/session')
def session_info():
    """Login state and the CSRF token to send as ``X-CSRFToken``."""
    return jsonify({'operator': is_operator(), 'csrf_token': generate_csrf()})
