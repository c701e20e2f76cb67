"""
Tests for the AuctionService.

Covers the operator session: loading the stored snapshot, committing each
engine transition, the transient bid and broadcasting to displays.
"""

import threading

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app import engine
from app.db_utils import AuctionLock
from app.enums import PlayerStatus
from app.services.base import (
    AuctionInProgressError,
    AuctionNotStartedError,
    InsufficientBudgetError,
    NothingToUndoError,
    PlayerNotFoundError,
    ServiceError,
    SetupIncompleteError,
    TeamNotSelectedError,
    ValidationError,
)
from app.services.player_service import player_service
from app.services.team_service import team_service


@pytest.fixture
def running(service, sample_teams, sample_players):
    """Started auction with Asha as the first lot."""
    service.start_auction()
    return {**sample_teams, **sample_players}


class TestLifecycle:
    """Tests for starting and ending the auction."""

    def test_start_requires_setup(self, service):
        with pytest.raises(SetupIncompleteError):
            service.start_auction()

    def test_start_without_players(self, service, sample_teams):
        with pytest.raises(SetupIncompleteError):
            service.start_auction()

    def test_start_persists_snapshot(self, service, running, broadcasts):
        state = service.load_state()
        assert state.auction_started is True
        assert state.current_player.id == running['asha']
        assert len(broadcasts) == 1
        assert broadcasts[0]['current_player']['name'] == 'Asha'

    def test_cannot_start_twice(self, service, running):
        with pytest.raises(AuctionInProgressError):
            service.start_auction()

    def test_lot_operations_need_started_auction(self, service, sample_teams, sample_players):
        with pytest.raises(AuctionNotStartedError):
            service.mark_unsold(sample_players['asha'])

    def test_end_auction(self, service, running):
        service.end_auction()
        payload = service.get_auction_state()
        assert payload['state']['auction_completed'] is True
        assert payload['can_end'] is False

    def test_setup_locked_once_started(self, running):
        with pytest.raises(AuctionInProgressError):
            team_service.create_team('Gamma')
        with pytest.raises(AuctionInProgressError):
            player_service.delete_player(running['asha'])


class TestSell:
    """Tests for selling through the running bid."""

    def test_sell_uses_running_bid(self, service, running):
        service.select_team(running['alpha'])
        service.increment_price(5000)
        state = service.sell()

        alpha = team_service.get_team(running['alpha'])
        assert alpha['remaining_budget'] == 85_000
        assert [p['name'] for p in alpha['players']] == ['Asha']

        sold = player_service.get_players(status='sold')
        assert [p['name'] for p in sold] == ['Asha']
        assert sold[0]['current_price'] == 15_000
        assert state.current_player.id == running['bina']

    def test_bid_resets_for_next_lot(self, service, running):
        service.select_team(running['alpha'])
        service.sell()

        bid = service.current_bid()
        assert bid.player_id == running['bina']
        assert bid.current_price == 20_000
        assert bid.selected_team_id is None

    def test_sell_without_team_changes_nothing(self, service, running, broadcasts):
        with pytest.raises(TeamNotSelectedError):
            service.sell()

        assert service.load_state().history == ()
        assert len(broadcasts) == 1

    def test_sell_over_budget(self, service, running):
        with pytest.raises(InsufficientBudgetError):
            service.sell(team_id=running['beta'], price=60_000)
        assert team_service.get_team(running['beta'])['remaining_budget'] == 50_000

    def test_sell_rejects_negative_price(self, service, running):
        with pytest.raises(ValidationError):
            service.sell(team_id=running['alpha'], price=-1)

    def test_explicit_player_and_price(self, service, running):
        service.sell(player_id=running['chitra'], team_id=running['beta'], price=7000)
        assert team_service.get_team(running['beta'])['spent'] == 7000

    def test_other_player_ignores_running_bid(self, service, running):
        service.select_team(running['alpha'])
        service.increment_price(20_000)

        with pytest.raises(TeamNotSelectedError):
            service.sell(player_id=running['chitra'])

        service.sell(player_id=running['chitra'], team_id=running['beta'])
        assert team_service.get_team(running['beta'])['spent'] == 5000
        assert team_service.get_team(running['alpha'])['spent'] == 0

    def test_failed_commit_changes_nothing(self, service, running, broadcasts, monkeypatch):
        service.select_team(running['alpha'])
        service.increment_price(5000)
        before = service.load_state().to_dict()
        bid = service.current_bid()

        def fail(players):
            raise SQLAlchemyError('disk full')

        monkeypatch.setattr(service.repo, 'replace_players', fail)
        with pytest.raises(ServiceError) as exc:
            service.sell()

        assert exc.value.status_code == 500
        assert service.load_state().to_dict() == before
        assert service.current_bid() == bid
        assert len(broadcasts) == 1
        assert team_service.get_team(running['alpha'])['remaining_budget'] == 100_000


class TestUndoAndCorrections:
    """Tests for undo, transfer and status override."""

    def test_undo_sale(self, service, running):
        service.sell(team_id=running['alpha'], price=80_000)
        state = service.undo()

        assert state.history == ()
        assert state.current_player.id == running['asha']
        assert team_service.get_team(running['alpha'])['remaining_budget'] == 100_000
        asha = player_service.get_players(status='available')[0]
        assert asha['name'] == 'Asha'
        assert asha['current_price'] is None

    def test_undo_with_no_history(self, service, running):
        with pytest.raises(NothingToUndoError):
            service.undo()

    def test_pass_keeps_status(self, service, running):
        service.pass_player()
        players = {p['id']: p for p in player_service.get_players()}
        assert players[running['asha']]['status'] == 'available'

    def test_unsold(self, service, running):
        service.mark_unsold()
        players = {p['id']: p for p in player_service.get_players()}
        assert players[running['asha']]['status'] == 'unsold'

    def test_transfer_not_undone(self, service, running):
        service.sell(team_id=running['alpha'], price=80_000)
        service.transfer(running['beta'], player_id=running['asha'], price=50_000)

        assert team_service.get_team(running['alpha'])['remaining_budget'] == 100_000
        assert team_service.get_team(running['beta'])['remaining_budget'] == 0

        state = service.undo()
        assert state.history == ()
        with pytest.raises(NothingToUndoError):
            service.undo()

    def test_set_status_releases_player(self, service, running):
        service.sell(team_id=running['alpha'], price=30_000)
        service.set_status('available', player_id=running['asha'])

        assert team_service.get_team(running['alpha'])['players'] == []
        assert team_service.get_team(running['alpha'])['remaining_budget'] == 100_000

    def test_set_status_rejects_unknown_status(self, service, running):
        with pytest.raises(ValidationError):
            service.set_status('retired')

    def test_select_player(self, service, running):
        state = service.select_player(running['chitra'])
        assert state.current_player.name == 'Chitra'
        assert service.current_bid().current_price == 5000

    def test_select_unknown_player(self, service, running):
        with pytest.raises(PlayerNotFoundError):
            service.select_player('missing')


class TestBidAdjustments:
    def test_set_and_reset_price(self, service, running):
        service.select_team(running['beta'])
        assert service.set_price(42_000).current_price == 42_000

        bid = service.reset_price()
        assert bid.current_price == 10_000
        assert bid.selected_team_id is None

    def test_bid_changes_under_held_lock(self, service, running):
        with AuctionLock():
            service.select_team(running['beta'])
            bid = service.increment_price(1000)
            assert service.current_bid() == bid
        assert bid.current_price == 11_000
        assert bid.selected_team_id == running['beta']

    def test_bid_changes_hold_the_lock(self, service, running, monkeypatch):
        held_elsewhere = []
        original = engine.increment_price

        def try_lock():
            acquired = AuctionLock._lock.acquire(blocking=False)
            if acquired:
                AuctionLock._lock.release()
            held_elsewhere.append(not acquired)

        def checked(bid, amount):
            worker = threading.Thread(target=try_lock)
            worker.start()
            worker.join()
            return original(bid, amount)

        monkeypatch.setattr(engine, 'increment_price', checked)
        service.increment_price(1000)
        assert held_elsewhere == [True]

    def test_bid_without_lot(self, service, running):
        for _ in range(3):
            service.move_to_next()
        assert service.load_state().all_processed is True
        with pytest.raises(PlayerNotFoundError):
            service.increment_price(1000)


class TestMaintenance:
    def test_reset_clears_everything(self, service, running, broadcasts):
        service.sell(team_id=running['alpha'], price=10_000)
        assert service.reset() == {'success': True}

        stats = service.get_stats()
        assert stats['teams'] == 0
        assert stats['players'] == 0
        assert stats['has_auction'] is False
        assert broadcasts[-1]['state']['teams'] == []

    def test_stats_count_statuses(self, service, running):
        service.sell(team_id=running['alpha'], price=10_000)
        service.mark_unsold()

        stats = service.get_stats()
        assert stats['teams'] == 2
        assert stats['players'] == 3
        assert stats['has_auction'] is True
        assert stats['players_by_status'][PlayerStatus.SOLD.value] == 1
        assert stats['players_by_status'][PlayerStatus.UNSOLD.value] == 1
