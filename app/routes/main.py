"""
Main routes for the auction application.

Handles:
- Index (current auction snapshot for displays)
- Health check
"""

from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.routes import main_bp
from app.services.auction_service import auction_service
from app.utils import get_local_time, is_operator


@main_bp.route('/')
def index():
    """Current auction snapshot, readable without logging in."""
    payload = auction_service.get_auction_state()
    payload['operator_mode'] = is_operator()
    payload['bid_increments'] = list(current_app.config['BID_INCREMENTS'])
    return jsonify(payload)


@main_bp.route('/health')
def health_check():
    """Health check endpoint for load balancers and orchestration.

    Returns:
        JSON with health status and database connectivity
    """
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({
            'status': 'healthy',
            'database': 'connected',
            'timestamp': get_local_time().isoformat()
        })
    except SQLAlchemyError as e:
        return jsonify({
            'status': 'unhealthy',
            'database': 'disconnected',
            'error': str(e)
        }), 503
