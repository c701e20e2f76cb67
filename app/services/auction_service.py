"""
Auction service for running the live auction.

Encapsulates the operator session around the pure engine:
- Loading the current snapshot from storage
- Applying one engine transition per call
- Persisting teams, players and the snapshot in one transaction
- Tracking the transient bid (price and selected team) for the lot
- Broadcasting committed snapshots to connected displays
"""

from typing import Any, Callable, Dict, List, Optional

from app import engine, socketio
from app.constants import STATE_EVENT
from app.dataclasses import AuctionState, BidState, Player, index_by_id
from app.db_utils import AuctionLock
from app.enums import PlayerStatus
from app.logger import get_engine_logger, get_logger, log_audit
from app.repositories.state_repository import StateRepository
from app.services.base import (
    AuctionInProgressError,
    BaseService,
    PlayerNotFoundError,
    ValidationError,
)

logger = get_logger(__name__)
engine_logger = get_engine_logger()


def broadcast_state(payload: Dict[str, Any]) -> None:
    """Push a committed snapshot to every connected display."""
    socketio.emit(STATE_EVENT, payload)


class AuctionService(BaseService):
    """Operator session for the live auction.

    Every mutating call reads the stored snapshot, asks the engine for the
    next one, and commits it before returning. If the commit fails nothing
    is swapped in: the stored snapshot stays the baseline.
    """

    def __init__(
        self,
        repo: Optional[StateRepository] = None,
        broadcaster: Optional[Callable[[Dict[str, Any]], None]] = None,
    ):
        """Initialize service with optional collaborator injection.

        Args:
            repo: StateRepository instance (defaults to new instance).
            broadcaster: Called with each committed payload
                (defaults to the Socket.IO broadcast).
        """
        self.repo = repo or StateRepository()
        self.broadcaster = broadcaster or broadcast_state
        self.bid = BidState()

    # ==================== READS ====================

    def load_state(self) -> AuctionState:
        """The stored snapshot, or an unstarted one built from setup data."""
        state = self.repo.load_auction_state()
        if state is None:
            state = engine.initial_state(self.repo.load_teams(), self.repo.load_players())
        return state

    def current_bid(self, state: Optional[AuctionState] = None) -> BidState:
        """Transient bid for the lot under the cursor.

        Moving to a different lot resets it to that lot's base price.
        """
        with AuctionLock():
            state = state or self.load_state()
            lot = state.current_player
            if lot is None:
                self.bid = BidState()
            elif self.bid.player_id != lot.id:
                self.bid = engine.bid_for(lot)
            return self.bid

    def get_auction_state(self) -> Dict[str, Any]:
        """Snapshot plus the derived fields a display needs."""
        with AuctionLock():
            state = self.load_state()
            return self._payload(state, self.current_bid(state))

    # ==================== LIFECYCLE ====================

    def start_auction(self) -> AuctionState:
        """Start the auction over the available players.

        Raises:
            AuctionInProgressError: If an auction has already started.
            SetupIncompleteError: If there are no teams or players.
        """
        with AuctionLock():
            stored = self.repo.load_auction_state()
            if stored is not None and stored.auction_started:
                raise AuctionInProgressError("Auction already started")

            state = engine.start_auction(self.repo.load_teams(), self.repo.load_players())
            self._commit(state, 'auction_started', 'auction', details={
                'teams': len(state.teams),
                'players': len(state.players),
            })
            logger.info(f"Auction started: {len(state.players)} players ready")
            return state

    def end_auction(self) -> AuctionState:
        with AuctionLock():
            state = engine.end_auction(self.load_state())
            self._commit(state, 'auction_ended', 'auction', details={
                'sold': sum(1 for p in state.players if p.is_sold),
            })
            logger.info("Auction ended by operator")
            return state

    # ==================== LOT TRANSITIONS ====================

    def sell(
        self,
        player_id: Optional[str] = None,
        team_id: Optional[str] = None,
        price: Optional[float] = None,
    ) -> AuctionState:
        """Sell a player (default: the current lot).

        ``team_id`` and ``price`` default to the running bid when it is on
        this player. Any other player gets no team and its base price.

        Raises:
            TeamNotSelectedError, AlreadySoldError, AlreadyAssignedError,
            InsufficientBudgetError, TeamNotFoundError, PlayerNotFoundError
        """
        with AuctionLock():
            state = self.load_state()
            bid = self.current_bid(state)
            player = self._target(state, player_id)
            if bid.player_id != player.id:
                bid = engine.bid_for(player)
            team_id = team_id or bid.selected_team_id
            price = bid.current_price if price is None else price

            new_state = engine.sell(state, player.id, team_id, price)
            team = new_state.find_team(team_id)
            self._commit(new_state, 'player_sold', 'player', player.id, {
                'team_id': team.id,
                'price': price,
            })
            logger.info(f"Player {player.name} sold to {team.name} for {price}")
            return new_state

    def mark_unsold(self, player_id: Optional[str] = None) -> AuctionState:
        with AuctionLock():
            state = self.load_state()
            player = self._target(state, player_id)
            new_state = engine.mark_unsold(state, player.id)
            self._commit(new_state, 'player_unsold', 'player', player.id)
            logger.info(f"Player {player.name} marked as unsold")
            return new_state

    def pass_player(self, player_id: Optional[str] = None) -> AuctionState:
        with AuctionLock():
            state = self.load_state()
            player = self._target(state, player_id)
            new_state = engine.pass_player(state, player.id)
            self._commit(new_state, 'player_passed', 'player', player.id)
            logger.info(f"Skipped {player.name}")
            return new_state

    def move_to_next(self) -> AuctionState:
        with AuctionLock():
            new_state = engine.move_to_next(self.load_state())
            self._commit(new_state, 'moved_to_next', 'auction')
            return new_state

    def undo(self) -> AuctionState:
        """Revert the most recent sold/unsold/passed action.

        Raises:
            NothingToUndoError: If there is no history.
        """
        with AuctionLock():
            state = self.load_state()
            new_state = engine.undo(state)
            last = state.history[0]
            self._commit(new_state, 'undo', 'player', last.player_id, {
                'action': last.action.value,
                'team_id': last.team_id,
                'price': last.price,
            })
            logger.info(f"Reverted {last.action.value} for {last.player_name}")
            return new_state

    # ==================== CORRECTIONS ====================

    def transfer(
        self,
        team_id: Optional[str],
        player_id: Optional[str] = None,
        price: Optional[float] = None,
    ) -> AuctionState:
        """Move a player (default: the current lot) to another team."""
        with AuctionLock():
            state = self.load_state()
            player = self._target(state, player_id)
            previous = state.find_team(player.team_id)
            new_state = engine.transfer(state, player.id, team_id, price)
            _, moved = new_state.find_player(player.id)
            destination = new_state.find_team(team_id)
            self._commit(new_state, 'player_transferred', 'player', player.id, {
                'from_team_id': previous.id if previous else None,
                'to_team_id': destination.id,
                'price': moved.current_price,
            })
            logger.info(
                f"{player.name} moved from {previous.name if previous else 'None'} "
                f"to {destination.name} for {moved.current_price}"
            )
            return new_state

    def set_status(
        self,
        status: str,
        player_id: Optional[str] = None,
    ) -> AuctionState:
        """Override a player's status (default: the current lot)."""
        try:
            new_status = PlayerStatus.from_string(status)
        except (AttributeError, ValueError):
            raise ValidationError(f"Invalid status: {status}")

        with AuctionLock():
            state = self.load_state()
            player = self._target(state, player_id)
            new_state = engine.set_status(state, player.id, new_status)
            self._commit(new_state, 'status_changed', 'player', player.id, {
                'from': player.status.value,
                'to': new_status.value,
            })
            logger.info(f"{player.name} status changed to {new_status.value}")
            return new_state

    # ==================== NAVIGATION & BIDDING ====================

    def select_player(self, player_id: str) -> AuctionState:
        with AuctionLock():
            new_state = engine.select_player(self.load_state(), player_id)
            self._commit(new_state, 'player_selected', 'player', player_id)
            return new_state

    def select_team(self, team_id: str) -> BidState:
        with AuctionLock():
            state = self.load_state()
            self.bid = engine.select_team(self._bid_for_lot(state), state, team_id)
            return self.bid

    def set_price(self, price: float) -> BidState:
        with AuctionLock():
            self.bid = engine.set_current_price(self._bid_for_lot(self.load_state()), price)
            return self.bid

    def increment_price(self, amount: float) -> BidState:
        with AuctionLock():
            self.bid = engine.increment_price(self._bid_for_lot(self.load_state()), amount)
            return self.bid

    def reset_price(self) -> BidState:
        """Back to the current lot's base price with no team selected."""
        with AuctionLock():
            lot = self._target(self.load_state(), None)
            self.bid = engine.reset_to_base(self.bid, lot)
            logger.info(f"Reset to base price: {lot.base_price}")
            return self.bid

    # ==================== MAINTENANCE ====================

    def reset(self) -> Dict[str, Any]:
        """Delete teams, players and auction progress."""
        with AuctionLock():
            with self.transaction():
                self.repo.clear_all()
            self.bid = BidState()
            log_audit('data_reset', 'auction')
            self.broadcaster(self._payload(AuctionState(), self.bid))
            return {'success': True}

    def get_stats(self) -> Dict[str, Any]:
        return self.repo.get_stats().to_dict()

    # ==================== HELPERS ====================

    def _target(self, state: AuctionState, player_id: Optional[str]) -> Player:
        """The named player, or the lot under the cursor."""
        if player_id is None:
            player = state.current_player
            if player is None:
                raise PlayerNotFoundError("No player is up for auction")
            return player
        _, player = state.find_player(player_id)
        if player is None:
            raise PlayerNotFoundError()
        return player

    def _bid_for_lot(self, state: AuctionState) -> BidState:
        self._target(state, None)
        return self.current_bid(state)

    def _commit(
        self,
        state: AuctionState,
        action: str,
        entity_type: str,
        entity_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Persist ``state`` atomically, then reset the bid and broadcast."""
        with self.transaction():
            self.repo.replace_auction_state(state)
            self.repo.replace_teams(state.teams)
            self.repo.replace_players(self._merge_players(state.players))

        problems = engine.check_invariants(state)
        for problem in problems:
            engine_logger.warning(f"Invariant violated after {action}: {problem}")

        log_audit(action, entity_type, entity_id, details)
        self.bid = engine.bid_for(state.current_player)
        self.broadcaster(self._payload(state, self.bid))

    def _merge_players(self, working: List[Player]) -> List[Player]:
        """Stored players with the auction's working copies swapped in.

        Players outside the working set (e.g. already sold before the
        auction started) are kept as they are.
        """
        updated = index_by_id(working)
        stored = self.repo.load_players()
        merged = [updated.pop(p.id, p) for p in stored]
        return merged + list(updated.values())

    @staticmethod
    def _payload(state: AuctionState, bid: BidState) -> Dict[str, Any]:
        lot = state.current_player
        return {
            'state': state.to_dict(),
            'current_player': lot.to_dict() if lot else None,
            'bid': bid.to_dict(),
            'progress': state.progress,
            'all_processed': state.all_processed,
            'can_end': state.auction_started and not state.auction_completed,
        }


# Singleton instance for use in routes
auction_service = AuctionService()
