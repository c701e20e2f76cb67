"""
Tests for the PlayerService.

Tests the business logic for player management operations.
"""

import pytest

from app import db
from app.models import PlayerRecord
from app.services.base import PlayerNotFoundError, ValidationError
from app.services.player_service import PlayerService


class TestPlayerService:
    """Test suite for PlayerService."""

    @pytest.fixture
    def service(self, app):
        """Create player service instance."""
        return PlayerService()

    def test_create_player(self, service):
        """Test creating a new player."""
        result = service.create_player(
            name=' New Player ',
            base_price=15_000,
            role='Bowler',
            category='',
        )
        assert result['success'] is True

        record = db.session.get(PlayerRecord, result['player_id'])
        assert record is not None
        assert record.name == 'New Player'
        assert record.role == 'Bowler'
        assert record.category is None
        assert record.status == 'available'

    def test_create_player_requires_name(self, service):
        with pytest.raises(ValidationError):
            service.create_player(name='  ', base_price=1000)

    def test_create_player_rejects_negative_price(self, service):
        with pytest.raises(ValidationError):
            service.create_player(name='X', base_price=-1)

    def test_base_price_must_be_finite(self, service, sample_players):
        with pytest.raises(ValidationError):
            service.create_player(name='X', base_price=float('nan'))
        with pytest.raises(ValidationError):
            service.update_player(sample_players['asha'], base_price=float('inf'))

    def test_update_player(self, service, sample_players):
        service.update_player(sample_players['asha'], name='Asha K', base_price=12_000,
                              intro='Opening batter', role='')

        asha = next(p for p in service.get_players() if p['id'] == sample_players['asha'])
        assert asha['name'] == 'Asha K'
        assert asha['base_price'] == 12_000
        assert asha['intro'] == 'Opening batter'
        assert asha['role'] is None

    def test_update_unknown_field(self, service, sample_players):
        with pytest.raises(ValidationError):
            service.update_player(sample_players['asha'], status='sold')

    def test_update_missing_player(self, service):
        with pytest.raises(PlayerNotFoundError):
            service.update_player('missing', name='Nobody')

    def test_delete_player(self, service, sample_players):
        service.delete_player(sample_players['bina'])
        assert [p['name'] for p in service.get_players()] == ['Asha', 'Chitra']

    def test_delete_missing_player(self, service):
        with pytest.raises(PlayerNotFoundError):
            service.delete_player('missing')

    def test_import_keeps_order_and_defaults(self, service):
        result = service.import_players(
            "Zara, 5000, Capped\n"
            "\n"
            ", abc\n"
            "Yamini, -10\n",
            default_base_price=7500,
        )
        assert result['count'] == 3

        players = service.get_players()
        assert [p['name'] for p in players] == ['Zara', 'Player 2', 'Yamini']
        assert [p['base_price'] for p in players] == [5000, 7500, 7500]
        assert players[0]['category'] == 'Capped'

    def test_import_appends(self, service, sample_players):
        service.import_players("Devi")
        assert [p['name'] for p in service.get_players()][-1] == 'Devi'
        assert len(service.get_players()) == 4

    def test_import_nothing(self, service):
        with pytest.raises(ValidationError):
            service.import_players('   ')

    def test_filter_by_status(self, service, sample_players):
        assert len(service.get_players(status='available')) == 3
        assert service.get_players(status='SOLD') == []
        with pytest.raises(ValidationError):
            service.get_players(status='retired')
