"""
Player management API endpoints.

Handles CRUD operations and bulk import of players before the auction.
"""

from flask import jsonify, request

from app.constants import DEFAULT_BASE_PRICE
from app.routes import api_bp
from app.services.player_service import EDITABLE_FIELDS, player_service
from app.utils import (
    error_response,
    get_json_body,
    get_json_with_fields,
    operator_required,
    parse_amount,
)


@api_bp.route('/players', methods=['GET'])
def list_players():
    """All players, optionally filtered by ``?status=`` or ``?team_id=``."""
    return jsonify(player_service.get_players(
        status=request.args.get('status'),
        team_id=request.args.get('team_id'),
    ))


@api_bp.route('/players', methods=['POST'])
@operator_required
def create_player():
    data, error = get_json_with_fields(['name'])
    if error:
        return error

    base_price, error = parse_amount(data.get('base_price', DEFAULT_BASE_PRICE), 'Base price')
    if error:
        return error_response(error)

    result = player_service.create_player(
        data['name'],
        base_price,
        **{field: data.get(field) for field in EDITABLE_FIELDS},
    )
    return jsonify(result), 201


@api_bp.route('/players/<player_id>', methods=['PUT'])
@operator_required
def update_player(player_id: str):
    data, error = get_json_body()
    if error:
        return error

    base_price = data.get('base_price')
    if base_price is not None:
        base_price, error = parse_amount(base_price, 'Base price')
        if error:
            return error_response(error)

    fields = {field: data[field] for field in EDITABLE_FIELDS if field in data}
    return jsonify(player_service.update_player(
        player_id, name=data.get('name'), base_price=base_price, **fields
    ))


@api_bp.route('/players/<player_id>', methods=['DELETE'])
@operator_required
def delete_player(player_id: str):
    return jsonify(player_service.delete_player(player_id))


@api_bp.route('/players/import', methods=['POST'])
@operator_required
def import_players():
    """Bulk import from pasted text, one ``name, base_price, category, role`` per line.

    Accepts JSON ``{"text": ..., "default_base_price": ...}`` or a
    ``text/plain`` body.
    """
    data = request.get_json(silent=True)
    if data is None:
        text = request.get_data(as_text=True)
        default_price = DEFAULT_BASE_PRICE
    else:
        text = data.get('text', '')
        default_price, error = parse_amount(
            data.get('default_base_price', DEFAULT_BASE_PRICE), 'Default base price',
            allow_zero=False,
        )
        if error:
            return error_response(error)

    return jsonify(player_service.import_players(text, default_price)), 201
