"""
Tests for the TeamService.

Tests team setup: creation, budget edits, deletion and quick setup.
"""

import pytest

from app.constants import DEFAULT_TEAM_BUDGET, PRESET_COLORS
from app.dataclasses import Team
from app.services.base import ConflictError, TeamNotFoundError, ValidationError
from app.services.team_service import TeamService


class TestTeamService:
    """Test suite for TeamService."""

    @pytest.fixture
    def service(self, app):
        return TeamService()

    def test_create_team_defaults(self, service):
        result = service.create_team('Strikers')
        team = service.get_team(result['team_id'])

        assert team['name'] == 'Strikers'
        assert team['budget'] == DEFAULT_TEAM_BUDGET
        assert team['remaining_budget'] == DEFAULT_TEAM_BUDGET
        assert team['color'] == PRESET_COLORS[0]
        assert team['players'] == []

    def test_create_team_requires_name(self, service):
        with pytest.raises(ValidationError):
            service.create_team('')

    def test_duplicate_name(self, service):
        service.create_team('Strikers')
        with pytest.raises(ConflictError):
            service.create_team('Strikers ')

    def test_negative_budget(self, service):
        with pytest.raises(ValidationError):
            service.create_team('Strikers', budget=-5)

    def test_budget_must_be_finite(self, service, sample_teams):
        with pytest.raises(ValidationError):
            service.create_team('Strikers', budget=float('inf'))
        with pytest.raises(ValidationError):
            service.update_team(sample_teams['alpha'], budget=float('nan'))
        with pytest.raises(ValidationError):
            service.quick_setup(2, float('inf'))

    def test_update_team(self, service, sample_teams):
        service.update_team(sample_teams['beta'], name='Bravo', budget=80_000, color='#000000')
        team = service.get_team(sample_teams['beta'])
        assert team['name'] == 'Bravo'
        assert team['budget'] == 80_000
        assert team['remaining_budget'] == 80_000
        assert team['color'] == '#000000'

    def test_update_missing_team(self, service):
        with pytest.raises(TeamNotFoundError):
            service.update_team('missing', name='Ghost')

    def test_delete_team(self, service, sample_teams):
        service.delete_team(sample_teams['alpha'])
        assert [t['name'] for t in service.get_teams()] == ['Beta']
        with pytest.raises(TeamNotFoundError):
            service.get_team(sample_teams['alpha'])

    def test_quick_setup_replaces_teams(self, service, sample_teams):
        result = service.quick_setup(3, 60_000)
        assert len(result['team_ids']) == 3

        teams = service.get_teams()
        assert [t['name'] for t in teams] == ['Team 1', 'Team 2', 'Team 3']
        assert all(t['budget'] == 60_000 for t in teams)
        assert teams[1]['color'] == PRESET_COLORS[1]

    @pytest.mark.parametrize('count', [0, None])
    def test_quick_setup_needs_a_team(self, service, count):
        with pytest.raises(ValidationError):
            service.quick_setup(count, 1000)

    def test_budget_edits_keep_spend(self, service):
        spent_team = Team(id='t1', name='Spent', budget=100_000, remaining_budget=70_000)
        with service.transaction():
            service.repo.replace_teams([spent_team])

        service.update_team('t1', budget=50_000)
        team = service.get_team('t1')
        assert team['spent'] == 30_000
        assert team['remaining_budget'] == 20_000

        with pytest.raises(ValidationError):
            service.update_team('t1', budget=20_000)
