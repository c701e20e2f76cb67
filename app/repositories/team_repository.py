"""
Team repository for team data access.

Converts between ``TeamRecord`` rows and ``Team`` domain records.
"""

from typing import List, Optional, Sequence

from app.dataclasses import Player, Team
from app.models import TeamRecord
from app.repositories.base import BaseRepository


class TeamRepository(BaseRepository[TeamRecord]):
    """Repository for team data access operations."""

    def __init__(self):
        super().__init__(TeamRecord)

    @staticmethod
    def to_domain(record: TeamRecord) -> Team:
        return Team(
            id=record.id,
            name=record.name,
            color=record.color,
            budget=record.budget,
            remaining_budget=record.remaining_budget,
            players=tuple(Player.from_dict(p) for p in (record.players or [])),
        )

    @staticmethod
    def to_record(team: Team) -> TeamRecord:
        return TeamRecord(
            id=team.id,
            name=team.name,
            color=team.color,
            budget=team.budget,
            remaining_budget=team.remaining_budget,
            players=[p.to_dict() for p in team.players],
        )

    def load(self) -> List[Team]:
        """All teams, in stored order."""
        return [self.to_domain(r) for r in self.get_all()]

    def load_one(self, team_id: str) -> Optional[Team]:
        record = self.get(team_id)
        return self.to_domain(record) if record else None

    def replace(self, teams: Sequence[Team]) -> None:
        self.replace_all([self.to_record(t) for t in teams])

    def find_by_name(self, name: str) -> Optional[Team]:
        """Find a team by exact name.

        Args:
            name: Team name.

        Returns:
            Team or None.
        """
        records = self.filter_by(name=name)
        return self.to_domain(records[0]) if records else None
