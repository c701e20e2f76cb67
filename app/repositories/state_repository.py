"""
Durable storage for the auction.

Whole-collection load and replace of teams, players and the auction
snapshot. None of the ``replace_*`` methods commit: callers wrap them in
``BaseService.transaction()`` so that all three collections land together
or not at all.
"""

from typing import List, Optional, Sequence

from sqlalchemy import delete

from app import db
from app.constants import AUCTION_STATE_KEY
from app.dataclasses import AuctionState, Player, StorageStats, Team
from app.enums import PlayerStatus
from app.logger import get_db_logger
from app.models import AuctionStateRecord
from app.repositories.player_repository import PlayerRepository
from app.repositories.team_repository import TeamRepository

logger = get_db_logger()


class StateRepository:
    """Storage collaborator used by the auction services."""

    def __init__(
        self,
        team_repo: Optional[TeamRepository] = None,
        player_repo: Optional[PlayerRepository] = None,
    ):
        """Initialize with optional repository injection.

        Args:
            team_repo: TeamRepository instance (defaults to new instance).
            player_repo: PlayerRepository instance (defaults to new instance).
        """
        self.teams = team_repo or TeamRepository()
        self.players = player_repo or PlayerRepository()

    # ==================== TEAMS ====================

    def load_teams(self) -> List[Team]:
        return self.teams.load()

    def replace_teams(self, teams: Sequence[Team]) -> None:
        self.teams.replace(teams)

    # ==================== PLAYERS ====================

    def load_players(self) -> List[Player]:
        return self.players.load()

    def replace_players(self, players: Sequence[Player]) -> None:
        self.players.replace(players)

    def get_players_by_status(self, status: PlayerStatus) -> List[Player]:
        return self.players.get_by_status(status)

    def get_players_by_team(self, team_id: str) -> List[Player]:
        return self.players.get_by_team(team_id)

    # ==================== AUCTION SNAPSHOT ====================

    def load_auction_state(self) -> Optional[AuctionState]:
        """The saved snapshot, or None before the auction has started."""
        record = db.session.get(AuctionStateRecord, AUCTION_STATE_KEY)
        if record is None:
            return None
        return AuctionState.from_dict({
            'teams': record.teams,
            'players': record.players,
            'current_player_index': record.current_player_index,
            'auction_started': record.auction_started,
            'auction_completed': record.auction_completed,
            'history': record.history,
        })

    def replace_auction_state(self, state: AuctionState) -> None:
        data = state.to_dict()
        db.session.merge(AuctionStateRecord(
            id=AUCTION_STATE_KEY,
            current_player_index=data['current_player_index'],
            auction_started=data['auction_started'],
            auction_completed=data['auction_completed'],
            teams=data['teams'],
            players=data['players'],
            history=data['history'],
        ))

    # ==================== MAINTENANCE ====================

    def clear_all(self) -> None:
        """Delete teams, players and the auction snapshot."""
        self.teams.delete_all()
        self.players.delete_all()
        db.session.execute(delete(AuctionStateRecord))
        logger.info("Cleared all auction data")

    def get_stats(self) -> StorageStats:
        return StorageStats(
            teams=self.teams.count(),
            players=self.players.count(),
            has_auction=db.session.get(AuctionStateRecord, AUCTION_STATE_KEY) is not None,
            players_by_status=self.players.count_by_status(),
        )
