"""
Centralized logging configuration for the auction application.

Provides consistent logging across all modules with proper formatting
and configurable log levels. Supports structured JSON logging for production.
Every record carries the request id assigned in ``create_app`` so that the
lines of one auction action can be grouped.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Check if running in production for JSON logging
USE_JSON_LOGGING = os.environ.get('FLASK_CONFIG') == 'production'
LOG_LEVEL = getattr(logging, os.environ.get('LOG_LEVEL', 'INFO').upper(), logging.INFO)


def _request_context() -> Dict[str, Any]:
    """Request id, path and method of the active request, if any."""
    try:
        from flask import g, has_request_context, request
    except ImportError:
        return {}
    if not has_request_context():
        return {}
    return {
        'request_id': getattr(g, 'request_id', '-'),
        'path': request.path,
        'method': request.method,
    }


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging in production.

    Outputs one JSON object per line for log aggregation tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string.

        Args:
            record: The log record to format.

        Returns:
            JSON string representation of the log.
        """
        log_data: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
        }
        log_data.update(_request_context())

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_data'):
            log_data['extra'] = record.extra_data

        return json.dumps(log_data, default=str)


class RequestContextFilter(logging.Filter):
    """Filter that adds the request id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_context().get('request_id', '-')
        return True


def setup_logger(
    name: str,
    level: int = LOG_LEVEL,
    log_format: Optional[str] = None,
    use_json: Optional[bool] = None
) -> logging.Logger:
    """Configure a stdout logger once; later calls return it unchanged.

    Text lines include the request id. JSON output is used in production
    or when ``use_json`` is set.
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(level)
    logger.addFilter(RequestContextFilter())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    should_use_json = use_json if use_json is not None else USE_JSON_LOGGING

    if should_use_json:
        formatter = JSONFormatter()
    else:
        if log_format is None:
            log_format = '[%(asctime)s] %(levelname)s [%(request_id)s] %(module)s: %(message)s'
        formatter = logging.Formatter(log_format, datefmt='%Y-%m-%d %H:%M:%S')

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger for the given name.

    Example:
        logger = get_logger(__name__)
        logger.info(f"Player {player.name} sold to {team.name}")
    """
    return setup_logger(name)


# Pre-configured loggers for common modules
def get_api_logger() -> logging.Logger:
    """Get logger for API/route operations."""
    return get_logger('app.api')


def get_engine_logger() -> logging.Logger:
    """Get logger for auction state transitions."""
    return get_logger('app.engine')


def get_db_logger() -> logging.Logger:
    """Get logger for database operations."""
    return get_logger('app.db')


def get_audit_logger() -> logging.Logger:
    """Get logger for audit trail of committed auction actions."""
    return get_logger('app.audit')


def log_audit(
    action: str,
    entity_type: str,
    entity_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """Log an audit event for committed auction actions.

    Args:
        action: The action performed (e.g., 'player_sold', 'undo')
        entity_type: Type of entity affected (e.g., 'player', 'team')
        entity_id: ID of the affected entity
        details: Additional details about the action

    Example:
        log_audit('player_sold', 'player', player_id, {
            'team_id': team.id,
            'price': price
        })
    """
    message = f"AUDIT: {action} on {entity_type}"
    if entity_id:
        message += f" (id={entity_id})"
    if details:
        message += f" - {json.dumps(details, default=str)}"

    # JSONFormatter emits extra_data as its own field
    get_audit_logger().info(message, extra={'extra_data': {
        'action': action,
        'entity_type': entity_type,
        'entity_id': entity_id,
        'details': details,
    }})
