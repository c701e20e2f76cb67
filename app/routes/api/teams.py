"""
Team management API endpoints.

Teams can be edited only until the auction starts.
"""

from flask import jsonify, request

from app.constants import DEFAULT_TEAM_BUDGET
from app.routes import api_bp
from app.services.team_service import team_service
from app.utils import (
    error_response,
    get_json_body,
    get_json_with_fields,
    operator_required,
    parse_amount,
)


@api_bp.route('/teams', methods=['GET'])
def list_teams():
    return jsonify(team_service.get_teams())


@api_bp.route('/teams', methods=['POST'])
@operator_required
def create_team():
    data, error = get_json_with_fields(['name'])
    if error:
        return error

    budget = data.get('budget')
    if budget is not None:
        budget, error = parse_amount(budget, 'Budget')
        if error:
            return error_response(error)

    return jsonify(team_service.create_team(data['name'], budget, data.get('color'))), 201


@api_bp.route('/teams/<team_id>', methods=['GET'])
def get_team(team_id: str):
    return jsonify(team_service.get_team(team_id))


@api_bp.route('/teams/<team_id>', methods=['PUT'])
@operator_required
def update_team(team_id: str):
    data, error = get_json_body()
    if error:
        return error

    budget = data.get('budget')
    if budget is not None:
        budget, error = parse_amount(budget, 'Budget')
        if error:
            return error_response(error)

    return jsonify(team_service.update_team(
        team_id,
        name=data.get('name'),
        budget=budget,
        color=data.get('color'),
    ))


@api_bp.route('/teams/<team_id>', methods=['DELETE'])
@operator_required
def delete_team(team_id: str):
    return jsonify(team_service.delete_team(team_id))


@api_bp.route('/teams/quick-setup', methods=['POST'])
@operator_required
def quick_setup_teams():
    """Replace all teams with ``count`` numbered teams."""
    data = request.get_json(silent=True) or {}

    count, error = parse_amount(
        data.get('count'), 'Number of teams', allow_zero=False, integer=True
    )
    if error:
        return error_response(error)

    budget, error = parse_amount(data.get('budget', DEFAULT_TEAM_BUDGET), 'Budget')
    if error:
        return error_response(error)

    return jsonify(team_service.quick_setup(count, budget)), 201
