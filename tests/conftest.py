"""
Pytest fixtures for auction application tests.

Provides fixtures for app, client, database, and sample data.
"""

import pytest

from app import create_app, db
from app.dataclasses import AuctionState, Player, Team
from app.services.auction_service import AuctionService, auction_service
from app.services.player_service import player_service
from app.services.team_service import team_service


@pytest.fixture
def app():
    """Create application for testing with fresh database."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client for making requests."""
    return app.test_client()


@pytest.fixture
def operator_client(client):
    """Test client with an operator session."""
    with client.session_transaction() as session:
        session['is_operator'] = True
    return client


@pytest.fixture
def broadcasts():
    """Payloads pushed to displays by the auction service under test."""
    return []


@pytest.fixture
def service(app, broadcasts):
    """Auction service that records broadcasts instead of emitting them."""
    return AuctionService(broadcaster=broadcasts.append)


@pytest.fixture(autouse=True)
def quiet_broadcasts(monkeypatch):
    """Keep the shared route-level service from emitting Socket.IO events."""
    monkeypatch.setattr(auction_service, 'broadcaster', lambda payload: None)


@pytest.fixture
def sample_teams(app):
    """Two teams: Alpha with 100000 and Beta with 50000."""
    alpha = team_service.create_team('Alpha', 100_000)['team_id']
    beta = team_service.create_team('Beta', 50_000)['team_id']
    return {'alpha': alpha, 'beta': beta}


@pytest.fixture
def sample_players(app):
    """Three players with base prices 10000, 20000 and 5000."""
    result = player_service.import_players(
        "Asha, 10000, Marquee, Batter\n"
        "Bina, 20000, Marquee, Bowler\n"
        "Chitra, 5000, Uncapped, All-rounder\n"
    )
    ids = result['player_ids']
    return {'asha': ids[0], 'bina': ids[1], 'chitra': ids[2]}


# ==================== PURE ENGINE DATA ====================

def _player(player_id, base_price=10_000, **kwargs):
    return Player(id=player_id, name=kwargs.pop('name', player_id.upper()),
                  base_price=base_price, **kwargs)


def _team(team_id, budget=100_000, **kwargs):
    return Team(id=team_id, name=kwargs.pop('name', team_id.upper()),
                budget=budget, remaining_budget=kwargs.pop('remaining_budget', budget),
                **kwargs)


@pytest.fixture
def teams():
    return (_team('t1', 100_000), _team('t2', 50_000))


@pytest.fixture
def players():
    return (
        _player('p1', 10_000),
        _player('p2', 20_000),
        _player('p3', 5_000),
    )


@pytest.fixture
def started(teams, players):
    """A freshly started auction snapshot, no database involved."""
    return AuctionState(teams=teams, players=players, auction_started=True)
