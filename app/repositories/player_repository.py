"""
Player repository for player data access.

Converts between ``PlayerRecord`` rows and ``Player`` domain records and
offers the status/team lookups the setup and results views use.
"""

from typing import Dict, List, Sequence

from sqlalchemy import func, select

from app import db
from app.dataclasses import Player
from app.enums import PlayerStatus
from app.models import PlayerRecord
from app.repositories.base import BaseRepository


class PlayerRepository(BaseRepository[PlayerRecord]):
    """Repository for player data access operations."""

    def __init__(self):
        super().__init__(PlayerRecord)

    @staticmethod
    def to_domain(record: PlayerRecord) -> Player:
        return Player(
            id=record.id,
            name=record.name,
            base_price=record.base_price,
            status=PlayerStatus(record.status),
            category=record.category,
            role=record.role,
            intro=record.intro,
            photo_ref=record.photo_ref,
            current_price=record.current_price,
            team_id=record.team_id,
        )

    @staticmethod
    def to_record(player: Player) -> PlayerRecord:
        return PlayerRecord(
            id=player.id,
            name=player.name,
            base_price=player.base_price,
            status=player.status.value,
            category=player.category,
            role=player.role,
            intro=player.intro,
            photo_ref=player.photo_ref,
            current_price=player.current_price,
            team_id=player.team_id,
        )

    def load(self) -> List[Player]:
        """All players, in stored order."""
        return [self.to_domain(r) for r in self.get_all()]

    def replace(self, players: Sequence[Player]) -> None:
        self.replace_all([self.to_record(p) for p in players])

    def get_by_status(self, status: PlayerStatus) -> List[Player]:
        """Players with the given auction status.

        Args:
            status: Status to match.

        Returns:
            List of players in stored order.
        """
        return [self.to_domain(r) for r in self.filter_by(status=PlayerStatus(status).value)]

    def get_by_team(self, team_id: str) -> List[Player]:
        """Players currently owned by a team.

        Args:
            team_id: ID of the team.

        Returns:
            List of players in stored order.
        """
        return [self.to_domain(r) for r in self.filter_by(team_id=team_id)]

    def count_by_status(self) -> Dict[str, int]:
        """Number of players per status value."""
        rows = db.session.execute(
            select(PlayerRecord.status, func.count()).group_by(PlayerRecord.status)
        ).all()
        return {status: count for status, count in rows}
