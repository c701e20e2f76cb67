"""
Utility functions for the auction application.

Time helpers, JSON response helpers, the operator guard and request-body
parsing shared by the route modules.
"""

import math
import time
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

from flask import jsonify, request, session
from zoneinfo import ZoneInfo

from app.constants import DEFAULT_TIMEZONE

F = TypeVar('F', bound=Callable[..., Any])

# (data, None) on success, (None, error response) on failure
BodyResult = Tuple[Optional[Dict[str, Any]], Optional[Tuple[Any, int]]]


# ==================== TIME UTILITIES ====================

LOCAL_TZ = ZoneInfo(DEFAULT_TIMEZONE)


def get_local_time() -> datetime:
    """Get current time in the configured timezone."""
    return datetime.now(LOCAL_TZ)


def now_ms() -> int:
    """Current time as epoch milliseconds, the history timestamp unit."""
    return int(time.time() * 1000)


# ==================== RESPONSE HELPERS ====================

def success_response(data: Optional[Dict[str, Any]] = None, **kwargs: Any):
    """``{"success": true, ...data}`` with status 200."""
    response = {'success': True, **(data or {}), **kwargs}
    return jsonify(response), 200


def error_response(error: str, status_code: int = 400, **kwargs: Any):
    """``{"success": false, "error": ...}`` with the given status code."""
    response = {'success': False, 'error': error, **kwargs}
    return jsonify(response), status_code


# ==================== AUTHENTICATION HELPERS ====================

def is_operator() -> bool:
    """Check if the current session belongs to the auction operator."""
    return session.get('is_operator', False)


def operator_required(f: F) -> F:
    """Reject the request with 403 unless the operator is logged in."""
    @wraps(f)
    def decorated_function(*args: Any, **kwargs: Any) -> Any:
        if not is_operator():
            return error_response('Operator login required', 403)
        return f(*args, **kwargs)
    return decorated_function  # type: ignore


# ==================== INPUT PARSING ====================

def get_json_body() -> BodyResult:
    """Get the JSON request body, rejecting a missing or empty one.

    Example:
        data, error = get_json_body()
        if error:
            return error
    """
    data = request.get_json(silent=True)
    if not data:
        return None, error_response('Request body is required')
    return data, None


def get_json_with_fields(required_fields: List[str]) -> BodyResult:
    """Get the JSON body and require that ``required_fields`` are non-null."""
    data, error = get_json_body()
    if error:
        return None, error

    missing = [name for name in required_fields if data.get(name) is None]
    if missing:
        return None, error_response(f"Missing required fields: {', '.join(missing)}")
    return data, None


def parse_amount(
    value: Any,
    field_name: str,
    allow_zero: bool = True,
    integer: bool = False,
) -> Tuple[Optional[Union[int, float]], Optional[str]]:
    """Convert a price, budget or count from a request body.

    NaN, infinities and negative values are always rejected; zero only when
    ``allow_zero`` is False. Booleans are not numbers here even though
    Python says they are.

    Returns:
        Tuple of (converted value or None, error message or None)
    """
    kind = 'integer' if integer else 'number'
    if isinstance(value, bool):
        return None, f"{field_name} must be a valid {kind}"
    try:
        amount = int(value) if integer else float(value)
    except (TypeError, ValueError):
        return None, f"{field_name} must be a valid {kind}"

    if not math.isfinite(amount):
        return None, f"{field_name} must be a finite {kind}"
    if not is_valid_amount(amount, allow_zero):
        qualifier = 'non-negative' if allow_zero else 'positive'
        return None, f"{field_name} must be {qualifier}"
    return amount, None


def is_valid_amount(value: Union[int, float], allow_zero: bool = True) -> bool:
    """Finite and non-negative; strictly positive when ``allow_zero`` is False."""
    if not math.isfinite(value):
        return False
    return value >= 0 if allow_zero else value > 0


def safe_float(value: Any, default: float = 0.0) -> float:
    """Convert pasted text to float, falling back to ``default``."""
    if value is None or value == '' or value == '-':
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Strip a string, mapping empty results to None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None
