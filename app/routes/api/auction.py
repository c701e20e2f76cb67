"""
Auction API endpoints.

Handles the live auction: start/end, lot transitions (sell, unsold, pass,
next, undo), post-sale corrections and the transient bid. Rule violations
raised by the service are turned into JSON by the registered error handlers.
"""

from typing import Any, Dict

from flask import jsonify, request

from app.logger import get_api_logger
from app.routes import api_bp
from app.services.auction_service import auction_service
from app.utils import (
    error_response,
    get_json_with_fields,
    operator_required,
    parse_amount,
    success_response,
)

logger = get_api_logger()


def _body() -> Dict[str, Any]:
    """JSON body for endpoints where every field is optional."""
    return request.get_json(silent=True) or {}


def _state_response():
    return success_response(auction_service.get_auction_state())


def _bid_response(bid):
    return success_response({'bid': bid.to_dict()})


# ==================== STATE ====================

@api_bp.route('/auction/state')
def auction_state():
    """Current snapshot with derived display fields."""
    return jsonify(auction_service.get_auction_state())


# ==================== LIFECYCLE ====================

@api_bp.route('/auction/start', methods=['POST'])
@operator_required
def start_auction():
    auction_service.start_auction()
    return _state_response()


@api_bp.route('/auction/end', methods=['POST'])
@operator_required
def end_auction():
    auction_service.end_auction()
    return _state_response()


# ==================== LOT TRANSITIONS ====================

@api_bp.route('/auction/sell', methods=['POST'])
@operator_required
def sell_player():
    """Sell a player.

    Body (all optional): ``player_id`` (defaults to the current lot),
    ``team_id`` and ``price`` (default to the running bid).
    """
    data = _body()
    price = data.get('price')
    if price is not None:
        price, error = parse_amount(price, 'Price')
        if error:
            return error_response(error)

    auction_service.sell(
        player_id=data.get('player_id'),
        team_id=data.get('team_id'),
        price=price,
    )
    return _state_response()


@api_bp.route('/auction/unsold', methods=['POST'])
@operator_required
def mark_unsold():
    auction_service.mark_unsold(_body().get('player_id'))
    return _state_response()


@api_bp.route('/auction/pass', methods=['POST'])
@operator_required
def pass_player():
    auction_service.pass_player(_body().get('player_id'))
    return _state_response()


@api_bp.route('/auction/next', methods=['POST'])
@operator_required
def move_to_next():
    auction_service.move_to_next()
    return _state_response()


@api_bp.route('/auction/undo', methods=['POST'])
@operator_required
def undo():
    """Revert the most recent sold/unsold/passed action."""
    auction_service.undo()
    return _state_response()


@api_bp.route('/auction/select', methods=['POST'])
@operator_required
def select_player():
    data, error = get_json_with_fields(['player_id'])
    if error:
        return error
    auction_service.select_player(data['player_id'])
    return _state_response()


# ==================== CORRECTIONS ====================

@api_bp.route('/auction/transfer', methods=['POST'])
@operator_required
def transfer_player():
    """Move a sold player to another team.

    Body: ``team_id`` (required), ``player_id`` and ``price`` (optional;
    the price defaults to the player's current price).
    """
    data, error = get_json_with_fields(['team_id'])
    if error:
        return error

    price = data.get('price')
    if price is not None:
        price, error = parse_amount(price, 'Price')
        if error:
            return error_response(error)

    auction_service.transfer(data['team_id'], data.get('player_id'), price)
    return _state_response()


@api_bp.route('/auction/status', methods=['POST'])
@operator_required
def set_player_status():
    data, error = get_json_with_fields(['status'])
    if error:
        return error
    auction_service.set_status(data['status'], data.get('player_id'))
    return _state_response()


# ==================== BID ====================

@api_bp.route('/auction/select-team', methods=['POST'])
@operator_required
def select_team():
    data, error = get_json_with_fields(['team_id'])
    if error:
        return error
    return _bid_response(auction_service.select_team(data['team_id']))


@api_bp.route('/auction/price/set', methods=['POST'])
@operator_required
def set_price():
    data, error = get_json_with_fields(['price'])
    if error:
        return error

    price, error = parse_amount(data['price'], 'Price')
    if error:
        return error_response(error)
    return _bid_response(auction_service.set_price(price))


@api_bp.route('/auction/price/increment', methods=['POST'])
@operator_required
def increment_price():
    data, error = get_json_with_fields(['amount'])
    if error:
        return error

    amount, error = parse_amount(data['amount'], 'Increment', allow_zero=False)
    if error:
        return error_response(error)
    return _bid_response(auction_service.increment_price(amount))


@api_bp.route('/auction/price/reset', methods=['POST'])
@operator_required
def reset_price():
    return _bid_response(auction_service.reset_price())


# ==================== MAINTENANCE ====================

@api_bp.route('/reset', methods=['POST'])
@operator_required
def reset_all():
    """Delete all teams, players and auction progress."""
    logger.warning("Operator requested a full data reset")
    return jsonify(auction_service.reset())


@api_bp.route('/stats')
def stats():
    return jsonify(auction_service.get_stats())
