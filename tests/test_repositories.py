"""
Tests for the storage layer.

Whole-collection replace, stored order and the auction snapshot record.
"""

import pytest

from app import db
from app.dataclasses import AuctionState, HistoryEntry, Player, Team
from app.enums import HistoryAction, PlayerStatus
from app.repositories import StateRepository


@pytest.fixture
def repo(app):
    return StateRepository()


def _save(repo, teams=None, players=None, state=None):
    if teams is not None:
        repo.replace_teams(teams)
    if players is not None:
        repo.replace_players(players)
    if state is not None:
        repo.replace_auction_state(state)
    db.session.commit()


class TestCollections:
    def test_replace_keeps_given_order(self, repo):
        players = [Player(id=i, name=i.upper(), base_price=100) for i in ('c', 'a', 'b')]
        _save(repo, players=players)
        assert [p.id for p in repo.load_players()] == ['c', 'a', 'b']

        _save(repo, players=list(reversed(players)))
        assert [p.id for p in repo.load_players()] == ['b', 'a', 'c']

    def test_replace_deletes_missing(self, repo):
        _save(repo, teams=[Team(id='t1', name='A', budget=10, remaining_budget=10),
                           Team(id='t2', name='B', budget=10, remaining_budget=10)])
        _save(repo, teams=[Team(id='t2', name='B2', budget=20, remaining_budget=5)])

        teams = repo.load_teams()
        assert [(t.id, t.name, t.remaining_budget) for t in teams] == [('t2', 'B2', 5)]

    def test_roster_round_trip(self, repo):
        sold = Player(id='p1', name='Asha', base_price=10).sold_to('t1', 40)
        team = Team(id='t1', name='A', budget=100, remaining_budget=100).with_player(sold, 40)
        _save(repo, teams=[team], players=[sold])

        loaded = repo.load_teams()[0]
        assert loaded.players == (sold,)
        assert loaded.spent == 40
        assert repo.get_players_by_team('t1') == [sold]
        assert repo.get_players_by_status(PlayerStatus.SOLD) == [sold]

    def test_rollback_keeps_previous_collection(self, repo):
        _save(repo, players=[Player(id='p1', name='Asha', base_price=10)])
        repo.replace_players([])
        db.session.rollback()
        assert [p.id for p in repo.load_players()] == ['p1']


class TestAuctionSnapshot:
    def test_missing_snapshot(self, repo):
        assert repo.load_auction_state() is None

    def test_snapshot_round_trip(self, repo):
        state = AuctionState(
            teams=(Team(id='t1', name='A', budget=100, remaining_budget=100),),
            players=(Player(id='p1', name='Asha', base_price=10),),
            current_player_index=1,
            auction_started=True,
            history=(HistoryEntry(player_id='p1', player_name='Asha',
                                  action=HistoryAction.PASSED, timestamp=123),),
        )
        _save(repo, state=state)
        assert repo.load_auction_state() == state

        _save(repo, state=AuctionState(auction_started=True, auction_completed=True))
        assert repo.load_auction_state().auction_completed is True

    def test_clear_all_and_stats(self, repo):
        _save(
            repo,
            teams=[Team(id='t1', name='A', budget=100, remaining_budget=100)],
            players=[Player(id='p1', name='Asha', base_price=10),
                     Player(id='p2', name='Bina', base_price=10, status=PlayerStatus.UNSOLD)],
            state=AuctionState(auction_started=True),
        )
        stats = repo.get_stats()
        assert stats.teams == 1
        assert stats.players == 2
        assert stats.has_auction is True
        assert stats.players_by_status == {'available': 1, 'unsold': 1}

        repo.clear_all()
        db.session.commit()
        assert repo.get_stats().to_dict() == {
            'teams': 0, 'players': 0, 'has_auction': False, 'players_by_status': {},
        }
